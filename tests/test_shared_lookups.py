"""Tests for VPC and subnet lookups."""

from unittest.mock import MagicMock, patch

import pytest

from cachestack.networking.placement import SubnetPlacement
from cachestack.shared.lookups import lookup_subnet_ids, lookup_vpc


@patch("cachestack.shared.lookups.pulumi_aws.ec2.get_vpc")
def test_lookup_vpc(mock_get_vpc: MagicMock) -> None:
    mock_get_vpc.return_value.id = "vpc-123"
    aws_provider = MagicMock()

    vpc = lookup_vpc("vpc-123", aws_provider)

    assert vpc.id == "vpc-123"
    assert mock_get_vpc.call_args[1]["id"] == "vpc-123"


@patch("cachestack.shared.lookups.pulumi_aws.ec2.get_vpc")
def test_lookup_vpc_propagates_not_found(mock_get_vpc: MagicMock) -> None:
    """A missing VPC is not handled locally."""
    mock_get_vpc.side_effect = Exception("no matching VPC found")
    with pytest.raises(Exception, match="no matching VPC"):
        lookup_vpc("vpc-missing", MagicMock())


@patch("cachestack.shared.lookups.pulumi_aws.ec2.get_subnets")
def test_lookup_subnet_ids_filters_on_vpc_and_network_tag(mock_get_subnets: MagicMock) -> None:
    mock_get_subnets.return_value.ids = ["subnet-1", "subnet-2"]

    ids = lookup_subnet_ids("vpc-123", SubnetPlacement.ISOLATED, MagicMock())

    assert ids == ["subnet-1", "subnet-2"]
    filters = mock_get_subnets.call_args[1]["filters"]
    assert [(f.name, f.values) for f in filters] == [
        ("vpc-id", ["vpc-123"]),
        ("tag:network", ["isolated"]),
    ]


@patch("cachestack.shared.lookups.pulumi_aws.ec2.get_subnets")
def test_lookup_subnet_ids_none_found(mock_get_subnets: MagicMock) -> None:
    """No subnets of the requested type exits."""
    mock_get_subnets.return_value.ids = []
    with pytest.raises(SystemExit, match="No private subnets"):
        lookup_subnet_ids("vpc-123", SubnetPlacement.PRIVATE, MagicMock())
