"""
Built-in catalogs — the default package list and fixed locations.

``DEFAULT_PACKAGES`` is only the default for ``SetupConfig.packages``.
Callers always pass the list in explicitly, so tests and config files
can supply their own.
"""

from __future__ import annotations

HOMEBREW_INSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"

# Homebrew prefix depends on the CPU: Apple Silicon vs Intel
BREW_PATH_ARM64 = "/opt/homebrew/bin/brew"
BREW_PATH_DEFAULT = "/usr/local/bin/brew"

DEFAULT_PROFILE = ".zprofile"
DEFAULT_LOG_FILE = "new_mac_setup_log_file.txt"

# Order is install order. Casks and formulas are mixed on purpose: the
# install pass asks Homebrew which one each name is.
DEFAULT_PACKAGES: tuple[str, ...] = (
    # ── Command-line tools ──────────────────────────────────────
    "python",
    "git",
    "wget",
    "coreutils",
    "tree",
    "docker",
    "pyenv",
    "zsh-completion",
    "docker-compose",
    "ack",
    "midnight-commander",
    "pyenv-virtualenv",
    "thefuck",
    "gnutls",
    "highlight",
    "ssh-copy-id",
    "packer",
    "doxygen",
    "pv",
    "socat",
    "zsh-syntax-highlighting",
    "speedtest-cli",
    "spellcheck",
    "rename",
    "cowsay",
    "ripgrep",
    "logstash",
    "ncdu",
    "moreutils",
    "curl",
    "cmatrix",
    "trash",
    # ── Desktop applications ────────────────────────────────────
    "bitwarden",
    "windsurf",
    "visual-studio-code",
    "readdle-spark",
    "vivaldi",
    "chatgpt",
    "zen-browser",
    "sublime-text",
    "warp",
    "postman",
    "stats",
    "discord",
    "zoom",
    "notion",
    "podman-desktop",
    "virtualbox",
    "telegram",
    "signal",
    "whiskey",
    "grammarly-desktop",
    "nightfall",
    "neohtop",
    "mactracker",
    "trex",
    "poe",
    "gog-galaxy",
    "rocket",
    "nomachine",
    "beeper",
    "rectangle",
    "browserosaurus",
    "macwhisper",
    "dash",
    "headlamp",
    "font-monaspace-nerd-font",
    "quicklook-json",
    "todoist",
    "hyper",
    "keyclu",
    "coteditor",
    "mac-mouse-fix",
    "unnaturalscrollwheels",
    "nordvpn",
    "tailscale",
    "ollama",
    "tor-browser",
    "balenaetcher",
    "google-drive",
    "brave-browser",
    "transnomino",
    "only-switch",
    "sketchybar",
    "raycast",
)
