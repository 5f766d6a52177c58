#!/usr/bin/env python3
"""
Token issuing tool for local development and smoke testing
Signs bearer tokens with the configured JWT_SECRET.
"""

import os
import sys
import argparse
from typing import List, Optional

from dotenv import load_dotenv

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from config.settings import Settings
from services.jwt_service import JWTService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Issue a bearer token for a user")
    parser.add_argument("user_id", help="User id placed in the token subject")
    parser.add_argument("--email", help="Email claim")
    parser.add_argument("--admin", action="store_true", help="Set the is_admin claim")
    parser.add_argument("--expires-in", type=int, default=None, help="Token lifetime in seconds (default: no expiry)")
    return parser


def main(argv: Optional[List[str]] = None, environ=None) -> int:
    """Main CLI interface"""
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.from_env(environ)
        jwt_service = JWTService(settings.jwt_secret, [settings.jwt_algorithm])
        token = jwt_service.issue(
            args.user_id,
            email=args.email,
            is_admin=args.admin,
            expires_in=args.expires_in
        )
    except ValueError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        return 1

    print(token)
    return 0


if __name__ == "__main__":
    load_dotenv()
    sys.exit(main())
