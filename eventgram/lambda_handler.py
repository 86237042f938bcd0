"""AWS Lambda handler for the Eventgram API.

Wraps the FastAPI application with the Mangum adapter so it can run on
AWS Lambda behind API Gateway. Image resizing runs in a separate function,
see eventgram.imaging.handler.
"""

from mangum import Mangum

from eventgram.config import settings
from eventgram.main import app

# api_gateway_base_path strips the stage name from paths
handler = Mangum(app, lifespan="off", api_gateway_base_path=settings.api_gateway_base_path)


def lambda_handler(event: dict, context: object) -> dict:
    """
    AWS Lambda function handler.

    Args:
        event: API Gateway event containing request details
        context: Lambda context object with runtime information

    Returns:
        API Gateway response dict with statusCode, headers, and body
    """
    return handler(event, context)
