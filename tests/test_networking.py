"""Tests for the cache security group and KMS key."""

from unittest.mock import MagicMock, patch

from cachestack.encryption.kms import create_cache_kms_key
from cachestack.networking.security_groups import create_cache_security_group


@patch("cachestack.networking.security_groups.pulumi_aws.ec2.SecurityGroup")
def test_create_cache_security_group(mock_sg: MagicMock) -> None:
    """Security group allows all egress and no ingress."""
    mock_sg.return_value.id = "sg-123"
    result = create_cache_security_group("orders-dev", "vpc-1", MagicMock())

    assert result.id == "sg-123"
    assert mock_sg.call_args[0][0] == "orders-dev-ElastiCache-Security-Group"
    call_kw = mock_sg.call_args[1]
    assert call_kw["vpc_id"] == "vpc-1"
    assert call_kw["description"] == "orders-dev-ElastiCache-Security-Group"
    assert "ingress" not in call_kw
    assert len(call_kw["egress"]) == 1
    assert call_kw["egress"][0].protocol == "-1"
    assert call_kw["egress"][0].cidr_blocks == ["0.0.0.0/0"]


@patch("cachestack.encryption.kms.pulumi_aws.kms.Key")
def test_create_cache_kms_key_rotation_enabled(mock_key: MagicMock) -> None:
    create_cache_kms_key("orders-dev", MagicMock())

    assert mock_key.call_args[0][0] == "orders-dev-KMS-Key"
    call_kw = mock_key.call_args[1]
    assert call_kw["enable_key_rotation"] is True
    assert call_kw["description"] == "orders-dev-KMS-Key"
