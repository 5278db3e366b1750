"""
Lambda entrypoint for API Gateway proxy integrations.

The app and its clients are built during the cold start, so missing
configuration fails the init phase instead of individual requests.
"""
from mangum import Mangum

from app import create_app

handler = Mangum(create_app(), lifespan="off")
