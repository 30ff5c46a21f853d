"""Fixed seed data for new terminal sessions.

Every session starts from the same demo layout: a home directory for "user"
with a couple of documents, a minimal /etc, and a small process table.
"""

from datetime import datetime

from models.filesystem import FileSystem, FilesystemNode
from models.process import ProcessRecord, ProcessTable

DEFAULT_USER = "user"
DEFAULT_HOSTNAME = "ai-terminal"
DEFAULT_SHELL_NAME = "bash"
HOME_DIRECTORY = "/home/user"

README_TEXT = (
    "Welcome to the AI-Powered Linux Terminal!\n"
    "\n"
    "This is a fully functional Linux terminal simulator with AI assistance.\n"
    "\n"
    "Try commands like:\n"
    "- ls -la\n"
    "- cat readme.txt\n"
    "- ps aux\n"
    "- top\n"
    "- help\n"
    "\n"
    "Use the AI assistant for command suggestions and explanations!"
)

BASHRC_TEXT = (
    "# ~/.bashrc: executed by bash(1) for non-login shells\n"
    "\n"
    "# If not running interactively, don't do anything\n"
    "case $- in\n"
    "    *i*) ;;\n"
    "      *) return;;\n"
    "esac\n"
    "\n"
    "# enable color support of ls and also add handy aliases\n"
    "if [ -x /usr/bin/dircolors ]; then\n"
    '    test -r ~/.dircolors && eval "$(dircolors -b ~/.dircolors)" || eval "$(dircolors -b)"\n'
    "    alias ls='ls --color=auto'\n"
    "    alias grep='grep --color=auto'\n"
    "fi\n"
    "\n"
    "# some more ls aliases\n"
    "alias ll='ls -alF'\n"
    "alias la='ls -A'\n"
    "alias l='ls -CF'"
)

PASSWD_TEXT = (
    "root:x:0:0:root:/root:/bin/bash\n"
    "www-data:x:33:33:www-data:/var/www:/usr/sbin/nologin\n"
    "user:x:1000:1000:User:/home/user:/bin/bash\n"
    "nobody:x:65534:65534:nobody:/nonexistent:/usr/sbin/nologin"
)

# uid/gid of the accounts in /etc/passwd, used by stat
KNOWN_IDS = {
    "root": 0,
    "www-data": 33,
    "user": 1000,
    "nobody": 65534,
}

DEFAULT_ENVIRONMENT = {
    "PATH": "/usr/local/bin:/usr/bin:/bin:/usr/sbin:/sbin",
    "HOME": HOME_DIRECTORY,
    "USER": DEFAULT_USER,
    "SHELL": "/bin/bash",
    "PWD": HOME_DIRECTORY,
    "TERM": "xterm-256color",
    "LANG": "en_US.UTF-8",
}


def _root_dir(name: str, now: datetime, **children: FilesystemNode) -> FilesystemNode:
    return FilesystemNode.new_directory(
        name, now, children=dict(children), owner="root", group="root"
    )


def create_default_filesystem(now: datetime) -> FileSystem:
    """Build the demo filesystem every session starts with.

    Args:
        now: Timestamp given to every seeded node.

    Returns:
        A new FileSystem instance (never shared between sessions).
    """
    home_user = FilesystemNode.new_directory(
        "user",
        now,
        children={
            "Documents": FilesystemNode.new_directory(
                "Documents",
                now,
                children={
                    "readme.txt": FilesystemNode.new_file("readme.txt", now, README_TEXT),
                },
            ),
            "Downloads": FilesystemNode.new_directory("Downloads", now),
            ".bashrc": FilesystemNode.new_file(".bashrc", now, BASHRC_TEXT),
        },
    )

    etc = _root_dir(
        "etc",
        now,
        passwd=FilesystemNode.new_file(
            "passwd", now, PASSWD_TEXT, owner="root", group="root"
        ),
        hostname=FilesystemNode.new_file(
            "hostname", now, DEFAULT_HOSTNAME, owner="root", group="root"
        ),
    )

    root = FilesystemNode.new_directory(
        "/",
        now,
        children={
            "home": _root_dir("home", now, user=home_user),
            "etc": etc,
            "usr": _root_dir("usr", now, bin=_root_dir("bin", now)),
            "var": _root_dir("var", now, log=_root_dir("log", now)),
        },
        owner="root",
        group="root",
    )
    return FileSystem(root=root)


def create_default_processes() -> ProcessTable:
    """Build the demo process table every session starts with."""
    return ProcessTable(
        processes=[
            ProcessRecord(pid=1, name="systemd", cpu_percent=0.1, mem_percent=1.2, user="root"),
            ProcessRecord(pid=2, name="kthreadd", cpu_percent=0.0, mem_percent=0.0, user="root"),
            ProcessRecord(pid=123, name="bash", cpu_percent=0.2, mem_percent=2.1, user="user"),
            ProcessRecord(
                pid=456,
                name="ai-terminal",
                cpu_percent=1.5,
                mem_percent=15.3,
                user="user",
                status="R",
            ),
            ProcessRecord(pid=654, name="nginx", cpu_percent=0.3, mem_percent=3.4, user="www-data"),
            ProcessRecord(pid=789, name="chrome", cpu_percent=2.3, mem_percent=45.7, user="user"),
        ],
        next_pid=1000,
    )
