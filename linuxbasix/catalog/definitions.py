from dataclasses import dataclass, field

VERSION = "2.1"
BANNER = f"LinuxBasix // Version {VERSION} (Python edition)"

MAIN_MENU_OPTIONS = (
    "Select original repo packages",
    "Install original repo packages",
    "Select Flatpak packages",
    "Install Flatpak packages",
    "Install 1Password (via AgileBit repo)",
    "Install additional fonts",
    "Select package manager",
    "Copy configs from Github repo to HOME",
    "Exit (or press 'Q')",
)

# 1-based rows of MAIN_MENU_OPTIONS
ROW_SELECT_APT = 1
ROW_INSTALL_APT = 2
ROW_SELECT_FLATPAK = 3
ROW_INSTALL_FLATPAK = 4
ROW_INSTALL_1PASSWORD = 5
ROW_INSTALL_FONTS = 6
ROW_SELECT_PACKAGE_MANAGER = 7
ROW_COPY_CONFIGS = 8
ROW_EXIT = 9

APT_PROGRAMS = (
    "curl", "git", "neovim", "htop", "neofetch", "tilix", "gdu", "nala", "mc",
    "zip", "unzip", "fortune-mod", "build-essential", "flatpak", "preload",
    "cmatrix", "cool-retro-term", "powertop", "upx-ucl", "code",
)

FLATPAK_PROGRAMS = (
    "com.spotify.Client", "org.videolan.VLC",
    "com.github.tchx84.Flatseal", "com.discordapp.Discord",
    "com.ktechpit.colorwall", "com.mattjakeman.ExtensionManager", "com.microsoft.Edge",
    "com.valvesoftware.Steam", "net.cozic.joplin_desktop", "net.lutris.Lutris",
    "org.DolphinEmu.dolphin-emu", "org.duckstation.DuckStation", "org.libretro.RetroArch",
    "org.mozilla.Thunderbird", "net.sf.VICE", "net.fsuae.FS-UAE", "org.audacityteam.Audacity",
    "org.gimp.GIMP", "org.gnome.Boxes", "com.transmissionbt.Transmission", "fr.handbrake.ghb",
)

PACKAGE_MANAGER_CANDIDATES = ("apt", "pacman", "yum", "dnf", "zypper", "snap")

DEFAULT_PACKAGE_MANAGER = "apt"


@dataclass(frozen=True)
class ManagerCommands:
    refresh: tuple
    install: tuple


# How each detected manager refreshes its metadata and installs named packages.
PACKAGE_MANAGER_COMMANDS = {
    "apt": ManagerCommands(
        ("sudo", "apt", "update"),
        ("sudo", "apt", "install", "-y"),
    ),
    "pacman": ManagerCommands(
        ("sudo", "pacman", "-Sy"),
        ("sudo", "pacman", "-S", "--needed", "--noconfirm"),
    ),
    "yum": ManagerCommands(
        ("sudo", "yum", "makecache"),
        ("sudo", "yum", "install", "-y"),
    ),
    "dnf": ManagerCommands(
        ("sudo", "dnf", "makecache"),
        ("sudo", "dnf", "install", "-y"),
    ),
    "zypper": ManagerCommands(
        ("sudo", "zypper", "refresh"),
        ("sudo", "zypper", "install", "-y"),
    ),
    "snap": ManagerCommands(
        ("sudo", "snap", "refresh"),
        ("sudo", "snap", "install"),
    ),
}

FLATHUB_REMOTE = (
    "flatpak", "-v", "remote-add", "--if-not-exists", "flathub",
    "https://dl.flathub.org/repo/flathub.flatpakrepo",
)


@dataclass
class InstallPlan:
    title: str
    description: str
    commands: list = field(default_factory=list)
    is_risky: bool = False

    @property
    def needs_sudo(self) -> bool:
        return any("sudo" in " ".join(cmd).split() for cmd in self.commands)


ONEPASSWORD_COMMANDS = (
    ("sh", "-c", "curl -sS https://downloads.1password.com/linux/keys/1password.asc | sudo gpg --dearmor --output /usr/share/keyrings/1password-archive-keyring.gpg"),
    ("sh", "-c", "echo 'deb [arch=amd64 signed-by=/usr/share/keyrings/1password-archive-keyring.gpg] https://downloads.1password.com/linux/debian/amd64 stable main' | sudo tee /etc/apt/sources.list.d/1password.list"),
    ("sudo", "mkdir", "-p", "/etc/debsig/policies/AC2D62742012EA22/"),
    ("sh", "-c", "curl -sS https://downloads.1password.com/linux/debian/debsig/1password.pol | sudo tee /etc/debsig/policies/AC2D62742012EA22/1password.pol"),
    ("sudo", "mkdir", "-p", "/usr/share/debsig/keyrings/AC2D62742012EA22"),
    ("sh", "-c", "curl -sS https://downloads.1password.com/linux/keys/1password.asc | sudo gpg --dearmor --output /usr/share/debsig/keyrings/AC2D62742012EA22/debsig.gpg"),
    ("sh", "-c", "sudo apt update && printf '\\n' && sudo apt install -y 1password"),
)

FONT_COMMANDS = (
    ("echo", "Installing additional fonts."),
    ("wget", "https://github.com/source-foundry/Hack/releases/download/v3.003/Hack-v3.003-ttf.zip"),
    ("wget", "https://download.jetbrains.com/fonts/JetBrainsMono-1.0.3.zip"),
    ("sh", "-c", 'for i in *.zip; do unzip -u "$i" -d ~/.local/share/fonts && rm "$i"; done'),
    ("fc-cache", "-r", "-v"),
)
