"""
Client-side session state and navigation guards.

Nothing here is persisted: a new process starts signed out.
"""
from typing import Optional

LANDING = "/"
SIGNUP = "/signup"
SIGNIN = "/signin"
HOME = "/home"
SCAN = "/scan"
RESULT = "/result"

PUBLIC_ROUTES = (LANDING, SIGNUP, SIGNIN)


class ClientSession:
    def __init__(self):
        self.current_user: Optional[dict] = None
        self.last_scan_result: Optional[dict] = None

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def login(self, user: dict) -> None:
        self.current_user = user

    def logout(self) -> None:
        self.current_user = None
        self.last_scan_result = None

    def record_scan(self, result: dict) -> None:
        self.last_scan_result = result

    def redirect_for(self, path: str) -> Optional[str]:
        """Immediate redirect target for path, or None when it may be shown"""
        if path in PUBLIC_ROUTES:
            return None
        if path in (HOME, SCAN):
            return None if self.is_authenticated else SIGNIN
        if path == RESULT:
            if self.is_authenticated and self.last_scan_result is not None:
                return None
            return HOME
        return LANDING

    def resolve_route(self, path: str) -> str:
        """Follow redirects until reaching the page actually shown"""
        target = self.redirect_for(path)
        while target is not None:
            path = target
            target = self.redirect_for(path)
        return path
