#!/usr/bin/env python3
"""
CLI for identity credential management.

Issues, lists and revokes the bearer credentials callers use to sign in.
"""

import argparse
import asyncio
import sys
import uuid
from datetime import datetime, timezone
from typing import Optional

from eventgram.auth.credentials import build_token, generate_credential, hash_secret
from eventgram.models.identity import Identity
from eventgram.repositories.identity_repository import IdentityRepository


async def issue_identity(
    repo: IdentityRepository,
    email: str,
    identity_id: Optional[str] = None,
    description: Optional[str] = None,
) -> tuple[Identity, str]:
    """
    Issue a credential and store its hash.

    Args:
        repo: IdentityRepository instance
        email: E-mail address of the person
        identity_id: Existing identity to add a credential to (new if None)
        description: Human-readable description for the credential

    Returns:
        Tuple of (stored Identity, bearer token). The token is not stored.
    """
    key_id, secret = generate_credential()
    identity = Identity(
        key_id=key_id,
        key_hash=hash_secret(secret),
        identity_id=identity_id or uuid.uuid4().hex,
        email=email,
        status="active",
        created_at=datetime.now(timezone.utc).isoformat(),
        last_used_at=None,
        description=description,
    )
    await repo.create(identity)
    return identity, build_token(key_id, secret)


async def cmd_issue(
    email: str, identity_id: Optional[str], description: Optional[str]
) -> None:
    identity, token = await issue_identity(
        IdentityRepository(), email, identity_id, description
    )

    print("✓ Credential issued successfully")
    print(f"\nIdentity ID: {identity.identity_id}")
    print(f"Key ID: {identity.key_id}")
    print(f"Bearer token: {token}")
    print("\n⚠️  IMPORTANT: Save this token now!")
    print("   It will not be shown again.")
    print(f"\nE-mail: {identity.email}")
    print(f"Description: {identity.description or 'None'}")


async def cmd_list() -> None:
    """List all credentials with their metadata."""
    identities = await IdentityRepository().list_all()

    if not identities:
        print("No credentials found.")
        return

    print(f"\n{'Key ID':<34} {'Identity ID':<34} {'Status':<10}"
          f" {'E-mail':<30} {'Created':<34}")
    print("-" * 145)

    for identity in identities:
        email = identity.email
        if len(email) > 27:
            email = email[:27] + "..."
        print(
            f"{identity.key_id:<34} {identity.identity_id:<34}"
            f" {identity.status:<10} {email:<30} {identity.created_at:<34}"
        )

    print(f"\nTotal: {len(identities)} credentials")


async def cmd_revoke(key_id: str) -> None:
    """
    Revoke a credential by setting its status to revoked.

    Args:
        key_id: The key ID to revoke
    """
    repo = IdentityRepository()

    identity = await repo.get_by_key_id(key_id)
    if identity is None:
        print(f"✗ Error: credential {key_id} not found")
        sys.exit(1)

    if not identity.is_active:
        print(f"⚠️  Credential {key_id} is already revoked")
        return

    await repo.revoke(key_id)
    print(f"✓ Credential {key_id} has been revoked")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Manage sign-in credentials for the Eventgram API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")

    issue_parser = subparsers.add_parser("issue", help="Issue a new credential")
    issue_parser.add_argument("email", type=str, help="E-mail address of the person")
    issue_parser.add_argument(
        "--identity-id",
        type=str,
        help="Add a credential to an existing identity",
    )
    issue_parser.add_argument(
        "--description",
        type=str,
        help="Human-readable description for the credential",
    )

    subparsers.add_parser("list", help="List all credentials")

    revoke_parser = subparsers.add_parser("revoke", help="Revoke a credential")
    revoke_parser.add_argument("key_id", type=str, help="Key ID to revoke")

    return parser


def main() -> None:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "issue":
        asyncio.run(cmd_issue(args.email, args.identity_id, args.description))
    elif args.command == "list":
        asyncio.run(cmd_list())
    elif args.command == "revoke":
        asyncio.run(cmd_revoke(args.key_id))


if __name__ == "__main__":
    main()
