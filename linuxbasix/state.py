from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ProgramState:
    """Everything the user has chosen during this session."""
    selected_apt_programs: set = field(default_factory=set)
    selected_flatpak_programs: set = field(default_factory=set)
    selected_package_manager: Optional[str] = None
