"""Authentication module for loading the Linear API key.

This module handles loading the Linear personal API key from environment
variables using python-dotenv. It validates that the key is present and has
the expected prefix, and raises appropriate errors otherwise.
"""

import os

from dotenv import load_dotenv

from .errors import InvalidCredentialsError

# Personal API keys issued by Linear always carry this prefix
API_KEY_PREFIX = "lin_api"


class Authenticator:
    """Loads and validates the Linear API key from environment variables.

    The key is loaded from a .env file using python-dotenv and is never
    cached or logged to prevent security risks.

    Required environment variables:
        LINEAR_API_KEY: Linear personal API key (lin_api_*)

    Raises:
        InvalidCredentialsError: If the key is missing or malformed

    Example:
        >>> auth = Authenticator()
        >>> headers = {"Authorization": auth.get_api_key()}
    """

    def __init__(self):
        """Initialize the authenticator by loading environment variables from .env file."""
        load_dotenv()

    def get_api_key(self) -> str:
        """Get the Linear API key from the environment.

        Returns:
            The raw API key, suitable for the Authorization header

        Raises:
            InvalidCredentialsError: If the key is missing or lacks the lin_api prefix
        """
        api_key = os.getenv('LINEAR_API_KEY')

        if not api_key or not api_key.strip():
            raise InvalidCredentialsError("LINEAR_API_KEY is not set")

        api_key = api_key.strip()
        if not api_key.startswith(API_KEY_PREFIX):
            raise InvalidCredentialsError(
                f"LINEAR_API_KEY must start with '{API_KEY_PREFIX}'"
            )

        return api_key
