from messagecenter.lib.events import Notification, NotificationBus, get_default_bus
from messagecenter.lib.message_center import MessageCenter, Notifiable, Subscription
from messagecenter.lib.settings import Settings
from messagecenter.version import __version__

PACKAGE = __package__
VERSION = __version__

__all__ = [
    "VERSION",
    "PACKAGE",
    MessageCenter.__name__,
    Notifiable.__name__,
    Notification.__name__,
    NotificationBus.__name__,
    Settings.__name__,
    Subscription.__name__,
    get_default_bus.__name__,
]
