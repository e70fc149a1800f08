from ccard_activation.config import AppConfig, load_app_config
from ccard_activation.home import ActivationPaths, ensure_activation_layout, resolve_activation_home
from ccard_activation.login import authenticate, is_authorized

__version__ = "0.1.0"

__all__ = [
    "ActivationPaths",
    "AppConfig",
    "__version__",
    "authenticate",
    "ensure_activation_layout",
    "is_authorized",
    "load_app_config",
    "resolve_activation_home",
]
