from .client_creator import *  # noqa: F401,F403
from .client_creator import create_test_client, make_route, make_route_payload  # noqa: F401
