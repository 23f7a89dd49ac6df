import aws_cdk as core
import aws_cdk.aws_ec2 as ec2
import pytest

BREF_LAYER = "arn:aws:lambda:us-west-1:209497400698:layer:php-74-fpm:12"


@pytest.fixture
def stack():
    app = core.App()
    return core.Stack(app, "TestStack")


@pytest.fixture
def vpc(stack):
    return ec2.Vpc(stack, "TestVpc", max_azs=2, nat_gateways=1)


@pytest.fixture
def laravel_path(tmp_path):
    public = tmp_path / "laravel" / "public"
    public.mkdir(parents=True)
    (public / "index.php").write_text("<?php echo 'hello';\n")
    return str(tmp_path / "laravel")
