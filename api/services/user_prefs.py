"""
User preferences: window geometry and the address book file location.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from api.services.errors import require_non_null

DEFAULT_ADDRESS_BOOK_PATH = Path("data") / "clientbook.json"


@dataclass(frozen=True)
class GuiSettings:
    """Window size and position of the client list UI."""

    window_width: float = 740.0
    window_height: float = 600.0
    window_x: Optional[int] = None
    window_y: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "window_width": self.window_width,
            "window_height": self.window_height,
            "window_x": self.window_x,
            "window_y": self.window_y,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GuiSettings":
        defaults = cls()
        return cls(
            window_width=float(data.get("window_width", defaults.window_width)),
            window_height=float(data.get("window_height", defaults.window_height)),
            window_x=data.get("window_x"),
            window_y=data.get("window_y"),
        )


@dataclass
class UserPrefs:
    gui_settings: GuiSettings = field(default_factory=GuiSettings)
    address_book_file_path: Path = DEFAULT_ADDRESS_BOOK_PATH

    def reset_data(self, new_prefs: "UserPrefs") -> None:
        """Overwrite these preferences with a copy of new_prefs."""
        require_non_null(new_prefs, names=("user_prefs",))
        self.set_gui_settings(new_prefs.gui_settings)
        self.set_address_book_file_path(new_prefs.address_book_file_path)

    def set_gui_settings(self, gui_settings: GuiSettings) -> None:
        require_non_null(gui_settings, names=("gui_settings",))
        self.gui_settings = gui_settings

    def set_address_book_file_path(self, path: Path) -> None:
        require_non_null(path, names=("address_book_file_path",))
        self.address_book_file_path = Path(path)

    def to_dict(self) -> dict:
        return {
            "gui_settings": self.gui_settings.to_dict(),
            "address_book_file_path": str(self.address_book_file_path),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserPrefs":
        return cls(
            gui_settings=GuiSettings.from_dict(data.get("gui_settings") or {}),
            address_book_file_path=Path(data.get("address_book_file_path") or DEFAULT_ADDRESS_BOOK_PATH),
        )
