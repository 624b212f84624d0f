"""
Core Settings - allow-listed feature options and their save handler
"""
import hashlib
import hmac
import json
import os
import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

NONCE_ACTION = "uncode-core-settings-nonce"
DEFAULT_CAPABILITY = "edit_theme_options"


@dataclass
class OptionDefinition:
    """An on/off option shown on the core settings page"""
    option_id: str
    title: str
    description: str = ""
    autoload: bool = False
    warning: str = ""


CORE_OPTIONS: List[OptionDefinition] = [
    OptionDefinition(
        option_id="uncode_core_settings_opt_lightbox_enhance",
        title="New Lightbox",
        description="Activates the new Lightbox plugin, optimized for mobile, with touch events.",
        autoload=True,
        warning="Pages built with the old Lightbox should be revisited and saved.",
    ),
    OptionDefinition(
        option_id="uncode_core_settings_opt_disable_basic_header",
        title="Default Header",
        description="Deactivates the legacy Default Header in Theme Options and Page Options.",
        warning="Pages using a Default Header should recreate it with a different header method.",
    ),
    OptionDefinition(
        option_id="uncode_core_settings_opt_simplify_single_block_tab",
        title="Simple Single Block",
        description="Simplifies the Single Block tab to the essential options.",
        warning="Advanced thumbnail diversifications should be recreated.",
    ),
    OptionDefinition(
        option_id="uncode_core_settings_opt_enhanced_top_bar",
        title="New Top-Bar",
        description="Enables the new Top-Bar with three independent positions.",
        warning="Activates the new Top-Bar settings for Text, Secondary Menu and Social Icons.",
    ),
]


@dataclass
class SaveResult:
    """Outcome of an option save request"""
    success: bool
    message: str

    def to_json(self) -> Dict[str, Any]:
        return {"success": self.success, "data": {"message": self.message}}


class OptionStore:
    """Key-value option storage backed by a JSON file"""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.options: Dict[str, Dict[str, Any]] = {}
        self.lock = threading.Lock()
        if path and os.path.exists(path):
            with open(path, "r") as f:
                self.options = json.load(f)

    def get(self, option_id: str, default: Any = None) -> Any:
        entry = self.options.get(option_id)
        if entry is None:
            return default
        return entry.get("value", default)

    def is_autoload(self, option_id: str) -> bool:
        return bool(self.options.get(option_id, {}).get("autoload", False))

    def update(self, option_id: str, value: Any, autoload: bool = False):
        # Saves may arrive from the console thread
        with self.lock:
            options = dict(self.options)
            options[option_id] = {"value": value, "autoload": autoload}
            self.write(options)
            self.options = options

    def all(self) -> Dict[str, Any]:
        return {key: entry.get("value") for key, entry in self.options.items()}

    def write(self, options: Dict[str, Dict[str, Any]]):
        """Write `options` to a temporary file, then move it over the store"""
        if not self.path:
            return
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        temp_path = self.path + ".tmp"
        try:
            with open(temp_path, "w") as f:
                json.dump(options, f, indent=2)
            os.replace(temp_path, self.path)
        finally:
            if os.path.exists(temp_path):
                os.remove(temp_path)


class NonceManager:
    """
    Short-lived tokens binding a request to an action.

    A token is valid for the tick it was created in and the next one, a tick
    being half the lifetime.
    """

    def __init__(self, secret: str, lifetime: int = 86400, clock=time.time):
        self.secret = secret.encode("utf-8")
        self.lifetime = lifetime
        self.clock = clock

    def _tick(self) -> int:
        return int(self.clock() // (self.lifetime / 2))

    def _token(self, action: str, tick: int) -> str:
        message = f"{tick}|{action}".encode("utf-8")
        return hmac.new(self.secret, message, hashlib.sha256).hexdigest()[:10]

    def create(self, action: str) -> str:
        return self._token(action, self._tick())

    def verify(self, token: Optional[str], action: str) -> bool:
        if not token:
            return False
        tick = self._tick()
        for candidate in (tick, tick - 1):
            if hmac.compare_digest(str(token), self._token(action, candidate)):
                return True
        return False


class CoreSettings:
    """Core settings page: option definitions and the save handler"""

    def __init__(self, store: OptionStore, nonces: NonceManager,
                 options: Optional[List[OptionDefinition]] = None,
                 capability: str = DEFAULT_CAPABILITY, enable_debug: bool = False):
        self.store = store
        self.nonces = nonces
        self.definitions = list(CORE_OPTIONS if options is None else options)
        self.allowed = [definition.option_id for definition in self.definitions]
        self.capability = capability
        self.enable_debug = enable_debug

    def nonce(self) -> str:
        return self.nonces.create(NONCE_ACTION)

    def parameters(self) -> Dict[str, Any]:
        """Client-side parameters: debug flag, nonce and locale strings"""
        return {
            "enable_debug": self.enable_debug,
            "nonce": self.nonce(),
            "locale": {"button_confirm": "Save"},
        }

    def page(self) -> List[Dict[str, Any]]:
        """Option definitions with their stored state"""
        return [
            {
                "id": definition.option_id,
                "title": definition.title,
                "desc": definition.description,
                "autoload": definition.autoload,
                "warning": definition.warning,
                "value": self.store.get(definition.option_id, "false"),
            }
            for definition in self.definitions
        ]

    def is_enabled(self, option_id: str) -> bool:
        return self.store.get(option_id) in (True, "true", "on", "1", 1)

    def save_option(self, request: Dict[str, Any], capabilities: Iterable[str]) -> SaveResult:
        """
        Validate and persist one option.

        Checks capability, nonce, presence of value and option id, then the
        allow-list; the store is written only after every check passed.
        """
        if self.capability not in set(capabilities):
            return SaveResult(False, "Invalid capability.")

        if not self.nonces.verify(request.get("nonce"), NONCE_ACTION):
            return SaveResult(False, "Invalid nonce.")

        value = request.get("value")
        option_id = request.get("option_id")
        if not value or not option_id:
            return SaveResult(False, "Invalid data.")

        if option_id not in self.allowed:
            return SaveResult(False, "Invalid option.")

        autoload = request.get("autoload") in (True, "true")
        try:
            self.store.update(option_id, value, autoload)
        except OSError as e:
            print(f"Error saving option {option_id}: {e}")
            return SaveResult(False, "Option could not be saved.")
        return SaveResult(True, "Option saved.")
