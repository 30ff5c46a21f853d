"""Local command-suggestion catalog.

Deterministic, offline suggestions for a partially typed command line. A
catalog entry matches when its command name, or one of its example
variations, starts with the typed prefix (case-insensitive).
"""

from pydantic import BaseModel, Field

MAX_SUGGESTIONS = 3


class Suggestion(BaseModel):
    """A suggested command line.

    Args:
        command: Suggested command line.
        description: What the command does.
        confidence: Ranking score in [0, 1], highest first.
    """

    command: str = Field(description="Suggested command line")
    description: str = Field(description="What the command does")
    confidence: float = Field(ge=0.0, le=1.0, description="Ranking score")


class CatalogEntry(BaseModel):
    """A command known to the suggestion catalog."""

    name: str
    description: str
    variations: list[str]


_CATALOG_DATA = [
    # File operations
    ("ls", "List directory contents", ["ls -la", "ls -lh", "ls -lt"]),
    ("cd", "Change directory", ["cd ..", "cd ~", "cd /"]),
    ("pwd", "Print working directory", ["pwd"]),
    ("cat", "Display file contents", ["cat file.txt", "cat *.txt"]),
    ("head", "Show first lines of file", ["head -n 10", "head file.txt"]),
    ("tail", "Show last lines of file", ["tail -f", "tail -n 20"]),
    ("grep", "Search text patterns", ["grep -r", "grep -i", "grep -n"]),
    ("find", "Find files and directories", ["find . -name", "find / -type f"]),
    ("wc", "Word, line, character count", ["wc -l", "wc -w", "wc -c"]),
    ("sort", "Sort lines in file", ["sort -r", "sort -n", "sort -u"]),
    ("uniq", "Report unique lines", ["uniq -c", "uniq -d"]),
    ("cut", "Extract columns from file", ["cut -f1", "cut -d,"]),
    ("diff", "Compare files", ["diff -u", "diff -r"]),
    ("file", "Determine file type", ["file *", "file -b"]),
    ("stat", "Display file statistics", ["stat file.txt"]),
    ("du", "Disk usage", ["du -h", "du -s", "du -sh *"]),
    ("mkdir", "Create directory", ["mkdir -p", "mkdir dir1 dir2"]),
    ("touch", "Create empty file", ["touch file.txt"]),
    ("rm", "Remove files", ["rm -rf", "rm -i", "rm *.tmp"]),
    ("cp", "Copy files", ["cp -r", "cp -i", "cp file1 file2"]),
    ("mv", "Move/rename files", ["mv file1 file2", "mv *.txt dir/"]),
    ("ln", "Create links", ["ln -s", "ln file link"]),
    ("chmod", "Change permissions", ["chmod 755", "chmod +x", "chmod -R"]),
    ("chown", "Change ownership", ["chown user:group", "chown -R"]),
    # Archive and compression
    ("tar", "Archive files", ["tar -czf", "tar -xzf", "tar -tzf"]),
    ("gzip", "Compress files", ["gzip file.txt", "gzip -d"]),
    ("gunzip", "Decompress files", ["gunzip file.gz"]),
    ("zip", "Create zip archive", ["zip -r archive.zip dir/"]),
    ("unzip", "Extract zip archive", ["unzip archive.zip", "unzip -l"]),
    # Process management
    ("ps", "Show processes", ["ps aux", "ps -ef", "ps -u user"]),
    ("top", "Display running processes", ["top", "top -u user"]),
    ("htop", "Interactive process viewer", ["htop"]),
    ("kill", "Terminate process", ["kill -9", "kill -TERM"]),
    ("killall", "Kill processes by name", ["killall process"]),
    ("jobs", "Show active jobs", ["jobs"]),
    ("bg", "Background job", ["bg %1"]),
    ("fg", "Foreground job", ["fg %1"]),
    ("nohup", "Run immune to hangups", ["nohup command &"]),
    # System information
    ("whoami", "Current username", ["whoami"]),
    ("id", "User and group IDs", ["id", "id -u", "id -g"]),
    ("uname", "System information", ["uname -a", "uname -r"]),
    ("date", "Current date and time", ["date", "date +%Y-%m-%d"]),
    ("uptime", "System uptime", ["uptime"]),
    ("df", "Disk space usage", ["df -h", "df -i"]),
    ("free", "Memory usage", ["free -h", "free -m"]),
    ("lscpu", "CPU information", ["lscpu"]),
    ("lsblk", "Block devices", ["lsblk", "lsblk -f"]),
    ("lsusb", "USB devices", ["lsusb", "lsusb -v"]),
    ("lspci", "PCI devices", ["lspci", "lspci -v"]),
    ("mount", "Mount filesystems", ["mount", "mount -t ext4"]),
    ("umount", "Unmount filesystems", ["umount /mnt"]),
    ("lsof", "List open files", ["lsof -i", "lsof -p"]),
    ("netstat", "Network connections", ["netstat -tuln", "netstat -r"]),
    ("ss", "Socket statistics", ["ss -tuln", "ss -s"]),
    # Network tools
    ("ping", "Test connectivity", ["ping -c 4", "ping google.com"]),
    ("wget", "Download files", ["wget url", "wget -O file"]),
    ("curl", "Transfer data", ["curl url", "curl -I", "curl -X POST"]),
    ("ssh", "Secure shell", ["ssh user@host", "ssh -p 22"]),
    ("scp", "Secure copy", ["scp file user@host:", "scp -r"]),
    ("nslookup", "DNS lookup", ["nslookup domain"]),
    ("dig", "DNS lookup tool", ["dig domain", "dig @8.8.8.8"]),
    ("traceroute", "Trace network path", ["traceroute google.com"]),
    # Development tools
    ("git", "Version control", ["git status", "git add .", "git commit", "git push"]),
    ("make", "Build automation", ["make", "make clean", "make install"]),
    ("gcc", "C compiler", ["gcc -o output file.c", "gcc -Wall"]),
    ("python", "Python interpreter", ["python script.py", "python3 -m"]),
    ("node", "Node.js runtime", ["node script.js", "node --version"]),
    ("npm", "Node package manager", ["npm install", "npm start", "npm test"]),
    ("docker", "Containerization", ["docker ps", "docker run", "docker build"]),
    # Package management
    ("apt", "Package manager", ["apt update", "apt install", "apt search"]),
    ("yum", "Red Hat package manager", ["yum install", "yum update"]),
    ("snap", "Universal packages", ["snap install", "snap list"]),
    # Text editors
    ("vim", "Vi editor", ["vim file.txt", "vim +10 file"]),
    ("nano", "Simple text editor", ["nano file.txt"]),
    ("emacs", "Emacs editor", ["emacs file.txt"]),
    # Environment
    ("history", "Command history", ["history", "history 10"]),
    ("env", "Environment variables", ["env", "env | grep"]),
    ("export", "Set environment variable", ["export VAR=value"]),
    ("which", "Locate command", ["which command"]),
    ("whereis", "Locate binary/source", ["whereis command"]),
    ("alias", "Command aliases", ['alias ll="ls -la"']),
    # Utilities
    ("echo", "Display text", ['echo "hello"', "echo $VAR"]),
    ("sleep", "Pause execution", ["sleep 5", "sleep 1m"]),
    ("watch", "Repeat command", ["watch -n 1", "watch df -h"]),
    ("cal", "Calendar", ["cal", "cal 2 2024"]),
    ("bc", "Calculator", ["bc", 'echo "2+2" | bc']),
    ("seq", "Sequence of numbers", ["seq 1 10", "seq 1 2 10"]),
    ("fortune", "Random quote", ["fortune"]),
    ("cowsay", "ASCII cow", ['cowsay "hello"']),
    ("figlet", "ASCII art text", ['figlet "text"']),
    # Help
    ("man", "Manual pages", ["man command", "man -k keyword"]),
    ("help", "Help information", ["help"]),
    ("apropos", "Search manual descriptions", ["apropos keyword"]),
    ("whatis", "Brief command description", ["whatis command"]),
    ("clear", "Clear terminal", ["clear"]),
]

CATALOG = [
    CatalogEntry(name=name, description=description, variations=variations)
    for name, description, variations in _CATALOG_DATA
]


def get_local_suggestions(prefix: str, limit: int = MAX_SUGGESTIONS) -> list[Suggestion]:
    """Suggest complete command lines for a typed prefix.

    Entries are scanned in catalog order; the first matching variation of
    each matching entry is suggested (or its first variation when only the
    name matched). Confidence starts at 0.9 and drops by 0.1 per rank.

    Args:
        prefix: What the user has typed so far.
        limit: Maximum number of suggestions.

    Returns:
        Up to limit suggestions; empty for a blank prefix.

    Example:
        >>> [s.command for s in get_local_suggestions("ls")]
        ['ls -la', 'lscpu', 'lsblk']
    """
    needle = prefix.strip().lower()
    if not needle:
        return []

    suggestions = []
    for entry in CATALOG:
        if not (
            entry.name.startswith(needle)
            or any(variation.startswith(needle) for variation in entry.variations)
        ):
            continue
        best = next(
            (variation for variation in entry.variations if variation.startswith(needle)),
            entry.variations[0],
        )
        rank = len(suggestions)
        suggestions.append(
            Suggestion(
                command=best,
                description=entry.description,
                confidence=round(0.9 - rank * 0.1, 2),
            )
        )
        if len(suggestions) >= limit:
            break
    return suggestions
