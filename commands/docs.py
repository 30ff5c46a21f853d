"""Help and documentation commands: man, info, help, apropos, whatis."""

from commands.registry import command
from models.session import SessionState

MAN_PAGES = {
    "ls": """LS(1)                    User Commands                   LS(1)

NAME
       ls - list directory contents

SYNOPSIS
       ls [OPTION]... [FILE]...

DESCRIPTION
       List  information  about  the FILEs (the current directory by default).
       Sort entries alphabetically if none of -cftuvSUX nor --sort is specified.

       -a, --all
              do not ignore entries starting with .

       -h, --human-readable
              with -l, print sizes like 1K 234M 2G etc.

       -l     use a long listing format

EXAMPLES
       ls -la
              List all files in long format including hidden files""",
    "cat": """CAT(1)                   User Commands                   CAT(1)

NAME
       cat - concatenate files and print on the standard output

SYNOPSIS
       cat [OPTION]... [FILE]...

DESCRIPTION
       Concatenate FILE(s) to standard output.

EXAMPLES
       cat file.txt
              Display contents of file.txt""",
    "cd": """CD(1)                    Shell Builtin Commands         CD(1)

NAME
       cd - change directory

SYNOPSIS
       cd [dir]

DESCRIPTION
       Change the current directory to dir. The default dir is the value of the
       HOME shell variable. "cd -" returns to the previous directory ($OLDPWD).""",
    "grep": """GREP(1)                  User Commands                   GREP(1)

NAME
       grep - print lines that match patterns

SYNOPSIS
       grep [OPTION...] PATTERN [FILE...]

DESCRIPTION
       grep searches for PATTERN in each FILE and prints each line that
       matches.

       -i     ignore case distinctions in patterns and data
       -v     invert the sense of matching, to select non-matching lines
       -c     print only a count of matching lines per FILE
       -n     prefix each line of output with its line number""",
    "mkdir": """MKDIR(1)                 User Commands                   MKDIR(1)

NAME
       mkdir - make directories

SYNOPSIS
       mkdir [OPTION]... DIRECTORY...

DESCRIPTION
       Create the DIRECTORY(ies), if they do not already exist.

       -p, --parents
              no error if existing, make parent directories as needed""",
}

WHATIS_DESCRIPTIONS = {
    "ls": "ls (1) - list directory contents",
    "cat": "cat (1) - concatenate files and print on the standard output",
    "grep": "grep (1) - print lines matching a pattern",
    "find": "find (1) - search for files in a directory hierarchy",
    "ps": "ps (1) - report a snapshot of the current processes",
    "top": "top (1) - display Linux processes",
    "mkdir": "mkdir (1) - make directories",
    "rm": "rm (1) - remove files or directories",
}

HELP_TEXT = """AI-Powered Linux Terminal - Available Commands:

File Operations:
  ls [-lah]          - list directory contents
  cd [dir|-|~]       - change directory
  pwd                - print working directory
  cat <file>         - display file contents
  head/tail [-n N]   - show first/last N lines
  wc [-lwc] <file>   - word, line, character count
  sort [-rnu] <file> - sort lines in file
  uniq [-cdu] <file> - report or omit repeated lines
  cut -d D -f N <file> - extract columns from file
  grep [-invc] <pattern> <file> - search text patterns
  find <path> [-name P] [-type f|d] - find files and directories
  diff [-q] <file1> <file2> - compare files
  file <file>        - determine file type
  stat <file>        - display file statistics
  du [-hs] [path]    - disk usage
  mkdir [-p] <dir>   - create directory
  rmdir <dir>        - remove empty directory
  touch <file>       - create empty file
  rm [-rf] <file>    - remove files/directories
  cp [-r] <src> <dest> - copy files
  mv <src> <dest>    - move/rename files
  ln [-s] <src> <dest> - create links
  chmod [-R] <mode> <file> - change permissions
  chown [-R] <user> <file> - change ownership

Archive & Compression:
  tar [-cxtf] <file> - archive files
  gzip/gunzip <file> - compress/decompress
  zip/unzip <file>   - create/extract zip archives

Process Management:
  ps [aux|-ef]       - show running processes
  top/htop           - display running processes
  kill [-SIG] <pid>  - signal a process (kill -l lists signals)
  killall <name>     - kill processes by name
  jobs               - show active jobs
  bg/fg [job]        - background/foreground jobs
  nohup <command>    - run command immune to hangups

System Information:
  whoami             - current username
  id                 - user and group IDs
  uname [-a]         - system information
  hostname           - show the host name
  date               - current date and time
  uptime             - system uptime
  df [-h]            - disk space usage
  free [-h]          - memory usage
  lscpu              - CPU information
  lsblk              - block devices
  lsusb/lspci        - USB/PCI devices
  mount/umount       - mount/unmount filesystems
  lsof               - list open files
  netstat/ss         - network connections

Network Tools:
  ping [-c N] <host> - test network connectivity
  wget/curl <url>    - download files
  ssh <host>         - secure shell
  scp <src> <dest>   - secure copy
  nslookup/dig <host> - DNS lookup
  traceroute <host>  - trace network path

Text Editors:
  vim/nano/emacs     - text editors

Package Management:
  apt/yum/dnf        - package managers
  snap/flatpak       - universal packages

Development:
  git                - version control
  make               - build automation
  gcc                - C compiler
  python/node        - interpreters
  npm                - Node.js package manager
  docker             - containerization

Environment:
  history [N|-c]     - command history
  env                - environment variables
  export VAR=value   - set environment variable
  unset VAR          - remove environment variable
  which/whereis      - locate commands
  alias/unalias      - command aliases
  source <file>      - execute script

Utilities:
  echo <text>        - display text ($VAR is expanded)
  sleep <seconds>    - pause execution
  watch <command>    - repeat command
  cal [month [year]] - calendar
  bc                 - calculator
  seq [first [step]] last - sequence of numbers
  factor <number>    - prime factors
  fortune            - random quote
  cowsay <text>      - ASCII cow
  figlet <text>      - ASCII art text

Help:
  man <command>      - manual pages
  info <command>     - info documents
  help               - this help message
  apropos <keyword>  - search manual descriptions
  whatis <command>   - brief command description
  clear              - clear terminal

Use the AI assistant for command suggestions and explanations!"""


@command("man", group="docs")
def man(args: list[str], session: SessionState) -> str:
    if not args:
        return "What manual page do you want?"
    return MAN_PAGES.get(args[0], f"No manual entry for {args[0]}")


@command("info", group="docs")
def info(args: list[str], session: SessionState) -> str:
    if not args:
        return "info: usage: info [OPTION]... [MENU-ITEM...]"
    return f"info: simulated - would show info page for {args[0]}"


@command("help", group="docs")
def help_(args: list[str], session: SessionState) -> str:
    return HELP_TEXT


@command("apropos", group="docs")
def apropos(args: list[str], session: SessionState) -> str:
    if not args:
        return (
            "apropos: usage: apropos [-dalv?V] [-e|-w|-r] [-s list] [-m system] "
            "[-M path] [-L locale] [-C file] keyword ..."
        )
    keyword = args[0]
    return (
        f"{keyword} (1)              - search the manual page names and descriptions\n"
        f"{keyword} (3)              - library function\n"
        f"{keyword} (8)              - system administration command"
    )


@command("whatis", group="docs")
def whatis(args: list[str], session: SessionState) -> str:
    if not args:
        return (
            "whatis: usage: whatis [-dlv?V] [-r|-w] [-s list] [-m system] "
            "[-M path] [-L locale] [-C file] name ..."
        )
    return WHATIS_DESCRIPTIONS.get(args[0], f"{args[0]}: nothing appropriate.")
