"""Configure test suite environment"""
import os
import sys
from dataclasses import dataclass

import pytest

# Add the project root directory to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)

os.environ.setdefault("TRACKER_TABLE_NAME", "TrackerTable-test")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "lunaflow")


@pytest.fixture
def lambda_context():
    """Minimal Lambda context accepted by the powertools decorators."""
    @dataclass
    class LambdaContext:
        function_name: str = "lunaflow-test"
        memory_limit_in_mb: int = 128
        invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:lunaflow-test"
        aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"

    return LambdaContext()
