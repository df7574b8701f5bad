# hidayah/notifications.py
import sys
from typing import List

from colorama import Fore, Style

from .models import Notification

DEFAULT = "default"
DESTRUCTIVE = "destructive"


class Notifier:
    """Prints short colored status messages and remembers them."""

    def __init__(self, stream=None, echo: bool = True):
        self.stream = stream or sys.stdout
        self.echo = echo
        self.history: List[Notification] = []

    def notify(self, title: str, description: str = "", variant: str = DEFAULT) -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        self.history.append(notification)
        if self.echo:
            self._print(notification)
        return notification

    def success(self, title: str, description: str = "") -> Notification:
        return self.notify(title, description, DEFAULT)

    def error(self, title: str, description: str = "") -> Notification:
        return self.notify(title, description, DESTRUCTIVE)

    @property
    def last(self):
        return self.history[-1] if self.history else None

    def _print(self, notification: Notification):
        if notification.variant == DESTRUCTIVE:
            icon, color = "✗", Fore.RED
        else:
            icon, color = "✓", Fore.GREEN
        print(f"{color}{Style.BRIGHT}{icon} {notification.title}{Style.RESET_ALL}", file=self.stream)
        if notification.description:
            print(f"{Style.DIM}{Fore.WHITE}  {notification.description}{Style.RESET_ALL}", file=self.stream)
