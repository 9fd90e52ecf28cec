from __future__ import annotations

import logging

from ..context import SetupCtx
from ..errors import InvalidUsernameError, UnknownUserError
from ..lib.users import is_valid_username

logger = logging.getLogger(__name__)


class SelectUserStep:
    step_id = "45_select_user"
    title = "Configure user"
    verify = False

    def is_satisfied(self, ctx: SetupCtx) -> bool:
        return False

    def apply(self, ctx: SetupCtx) -> None:
        username = ctx.username or ctx.cfg.username
        if not username:
            username = ctx.prompter.ask("Enter your preferred Linux username (lowercase, no spaces)")

        if not is_valid_username(username):
            raise InvalidUsernameError(f"Invalid username {username!r}: use lowercase letters, digits, '-' or '_'")
        if not ctx.probe.user_exists(username):
            raise UnknownUserError(f"User {username!r} does not exist; create it first (adduser {username})")

        ctx.username = username
        ctx.decide("username", username)
        logger.info("Target user: %s", username)
