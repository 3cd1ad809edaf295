"""
Tests for schema validation of untrusted input.
"""

import pytest

from amplify.core.errors import ValidationError
from amplify.core.validation import validate
from amplify.models.schemas import (
    EmailCampaignModel,
    SocialInteractionCreate,
    SocialPostCreate,
)


class TestValidate:
    """Tests for validate()"""

    def test_valid_post_drops_unknown_fields(self):
        """Unknown keys never reach the returned value"""
        # Given: A post with an extra field
        data = {"platform": "x", "content": "hello", "likes": 99}

        # When: Validated
        post = validate(SocialPostCreate, data)

        # Then: Known fields kept, unknown dropped, optionals absent
        dumped = post.model_dump(exclude_none=True)
        assert dumped == {"platform": "x", "content": "hello"}
        assert post.scheduled_at is None

    def test_missing_required_field_is_named(self):
        with pytest.raises(ValidationError) as exc_info:
            validate(SocialPostCreate, {"platform": "x"})

        assert exc_info.value.issues == [{"path": "content", "reason": "missing"}]

    def test_every_violation_is_reported(self):
        """All bad fields are listed, not just the first"""
        data = {"content": 42, "tags": "not-a-list", "status": "archived"}

        with pytest.raises(ValidationError) as exc_info:
            validate(SocialPostCreate, data)

        issues = {i["path"]: i["reason"] for i in exc_info.value.issues}
        assert issues["platform"] == "missing"
        assert issues["content"] == "wrong type"
        assert issues["tags"] == "wrong type"
        assert issues["status"] == "not in enum"

    def test_nested_paths_use_dots(self):
        with pytest.raises(ValidationError) as exc_info:
            validate(SocialPostCreate, {"platform": "x", "content": "c", "media_urls": ["a", 3]})

        assert exc_info.value.paths == ["media_urls.1"]

    def test_interaction_type_restricted_to_enum(self):
        with pytest.raises(ValidationError) as exc_info:
            validate(SocialInteractionCreate, {"post_id": "p1", "type": "retweet"})

        assert exc_info.value.issues == [{"path": "type", "reason": "not in enum"}]

    def test_non_mapping_input_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate(EmailCampaignModel, None)

        assert exc_info.value.code == "VALIDATION_ERROR"
        assert exc_info.value.issues[0]["reason"] == "wrong type"
