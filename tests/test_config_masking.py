"""
Config masking policy tests.
"""

from topology.utils.config_masking import MASKED_FIELD_VALUE, MaskingPolicy, mask_config, mask_value


def test_default_policy_markers():
    policy = MaskingPolicy()
    
    assert policy.is_sensitive("AWS_ACCESS_KEY_ID")
    assert policy.is_sensitive("gcp_secret")
    assert policy.is_sensitive("DbPassword")
    assert policy.is_sensitive("api_token")
    assert not policy.is_sensitive("HOSTED_ZONE_ID")


def test_custom_policy_markers():
    policy = MaskingPolicy(markers=["project"])
    
    assert policy.is_sensitive("GCE_PROJECT")
    assert not policy.is_sensitive("AWS_ACCESS_KEY_ID")


def test_mask_value_keeps_two_characters_each_end():
    assert mask_value("abcdefgh") == "ab****gh"
    assert mask_value("abcde") == "ab*de"


def test_mask_value_hides_short_values_entirely():
    assert mask_value("abcd") == MASKED_FIELD_VALUE
    assert mask_value("") == MASKED_FIELD_VALUE
    assert mask_value(None) == MASKED_FIELD_VALUE


def test_mask_config_recurses_and_copies():
    config = {
        "region": "us-east-1",
        "credentials": {"SECRET": "supersecret", "user": "admin"},
    }
    
    masked = mask_config(config)
    
    assert masked == {
        "region": "us-east-1",
        "credentials": {"SECRET": "su*******et", "user": "admin"},
    }
    assert config["credentials"]["SECRET"] == "supersecret"
