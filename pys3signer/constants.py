ALGORITHM = "AWS4-HMAC-SHA256"
SERVICE = "s3"
TERMINATOR = "aws4_request"
SIGNED_HEADERS = "host"
UNSIGNED_PAYLOAD = "UNSIGNED-PAYLOAD"

DEFAULT_REGION = "us-east-1"
DEFAULT_EXPIRATION = 86400

S3_SOURCE_KEY = "s3_source"

PROVIDER_ENV = "env"
PROVIDER_INSTANCE_PROFILE = "instance_profile"

ENV_ACCESS_KEY_ID = "AWS_ACCESS_KEY_ID"
ENV_SECRET_ACCESS_KEY = "AWS_SECRET_ACCESS_KEY"
ENV_SESSION_TOKEN = "AWS_SESSION_TOKEN"

EC2_METADATA_CREDENTIALS = (
    "http://169.254.169.254/latest/meta-data/identity-credentials/ec2/"
    "security-credentials/ec2-instance"
)
METADATA_TIMEOUT = 5.0

BASE64_URI_TRANSLATE = {"+": "%2B", "/": "%2F", "=": "%3D"}
