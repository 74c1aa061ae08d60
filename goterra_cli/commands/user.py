"""User commands."""

from __future__ import annotations

import argparse

from goterra_cli.commands.base import Command, register_command
from goterra_cli.models import MASKED_PASSWORD, User


@register_command("user")
class UserCommand(Command):
    """Create, list and inspect users, change passwords."""

    @staticmethod
    def add_arguments(subparsers: argparse._SubParsersAction) -> None:
        subparsers.add_parser("list", help="List users [admin]")

        sub = subparsers.add_parser("show", help="Show user info [user or admin]")
        sub.add_argument("uid", metavar="UID", help="User id")

        sub = subparsers.add_parser("create", help="Register a new user [admin]")
        sub.add_argument("uid", metavar="UID", help="User id")
        sub.add_argument("--email", required=True, help="User email")
        sub.add_argument("--password", default=None, help="Initial password")

        sub = subparsers.add_parser("password", help="Modify user password [user or admin]")
        sub.add_argument("uid", metavar="UID", help="User id")
        sub.add_argument("password", metavar="PASSWORD", help="New password")

    def action_list(self) -> None:
        data = self.client.get_users()
        for item in data:
            item.pop("password", None)
        rows = []
        for item in data:
            user = User.from_dict(item)
            rows.append((user.uid, user.admin, user.super_user, user.email, user.kind))
        self.out.table(("UID", "Admin", "Super user", "Email", "Kind"), rows, raw=data)

    def action_show(self) -> None:
        user = self.client.get_user(self.args.uid)
        if "password" in user:
            user["password"] = MASKED_PASSWORD
        self.out.yaml(user)

    def action_create(self) -> None:
        user = {"uid": self.args.uid, "email": self.args.email}
        if self.args.password:
            user["password"] = self.args.password
        self.client.create_user(user)
        self.logger.info(f"User {self.args.uid} created")

    def action_password(self) -> None:
        self.client.set_user_password(self.args.uid, self.args.password)
        self.logger.info(f"Password updated for user {self.args.uid}")
