"""Print a bearer token for a seller account, for local testing."""

from __future__ import annotations

import argparse
from datetime import timedelta

from seller_notifications.domain.entities import AccountContext
from seller_notifications.infrastructure.security import create_account_token


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Issue an access token for an account.")
    parser.add_argument("--user-id", required=True, help="Account identifier (token subject)")
    parser.add_argument("--email", default=None, help="Optional email claim")
    parser.add_argument(
        "--minutes",
        type=int,
        default=None,
        help="Token lifetime in minutes (default: ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    expires = timedelta(minutes=args.minutes) if args.minutes else None
    token = create_account_token(AccountContext(user_id=args.user_id, email=args.email), expires)
    print(token)


if __name__ == "__main__":
    main()
