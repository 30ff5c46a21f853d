"""Development tools (simulated): git, make, gcc, interpreters, npm, docker, kubectl."""

from commands.registry import command
from models.session import SessionState

GIT_USAGE = (
    "git: usage: git [--version] [--help] [-C <path>] [-c <name>=<value>] "
    "[<command> [<args>]]"
)


@command("git", group="dev")
def git(args: list[str], session: SessionState) -> str:
    if not args:
        return GIT_USAGE

    action, rest = args[0], args[1:]
    if action == "status":
        return (
            "On branch main\n"
            "Your branch is up to date with 'origin/main'.\n"
            "\n"
            "nothing to commit, working tree clean"
        )
    if action == "log":
        return (
            "commit abc123def456 (HEAD -> main, origin/main)\n"
            "Author: User <user@example.com>\n"
            "Date:   Mon Jan 1 12:00:00 2024 +0000\n"
            "\n"
            "    Initial commit"
        )
    if action == "branch":
        return "* main"
    if action == "clone":
        return f"git: simulated - would clone {rest[0] if rest else 'repository'}"
    if action == "add":
        return f"git: simulated - would add {' '.join(rest) or 'files'} to staging"
    if action == "commit":
        return "git: simulated - would commit changes"
    if action == "push":
        return "git: simulated - would push to remote repository"
    if action == "pull":
        return "git: simulated - would pull from remote repository"
    return f"git: simulated - git command: {' '.join(args)}"


@command("make", group="dev")
def make(args: list[str], session: SessionState) -> str:
    if not args:
        return "make: *** No targets specified and no makefile found.  Stop."
    return f"make: simulated - would build target: {args[0]}"


@command("gcc", group="dev")
def gcc(args: list[str], session: SessionState) -> str:
    if not args:
        return "gcc: fatal error: no input files"
    return f"gcc: simulated - would compile {' '.join(args)}"


@command("python", "python3", group="dev")
def python(args: list[str], session: SessionState) -> str:
    if not args:
        return (
            "Python 3.9.2 (default, Feb 28 2021, 17:03:44)\n"
            "[GCC 10.2.1 20210110] on linux\n"
            'Type "help", "copyright", "credits" or "license" for more information.\n'
            ">>> (interactive mode simulated)"
        )
    return f"python: simulated - would execute {args[0]}"


@command("node", group="dev")
def node(args: list[str], session: SessionState) -> str:
    if not args:
        return (
            "Welcome to Node.js v16.14.0.\n"
            'Type ".help" for more information.\n'
            "> (interactive mode simulated)"
        )
    return f"node: simulated - would execute {args[0]}"


@command("npm", group="dev")
def npm(args: list[str], session: SessionState) -> str:
    if not args:
        return "npm: usage: npm <command>"

    action = args[0]
    if action == "install":
        return f"npm: simulated - would install {args[1] if len(args) > 1 else 'dependencies'}"
    if action == "start":
        return "npm: simulated - would start application"
    if action == "test":
        return "npm: simulated - would run tests"
    if action == "version":
        return "8.5.0"
    return f"npm: simulated - npm command: {' '.join(args)}"


@command("docker", group="dev")
def docker(args: list[str], session: SessionState) -> str:
    if not args:
        return "docker: usage: docker [OPTIONS] COMMAND"

    action = args[0]
    if action == "ps":
        return "CONTAINER ID   IMAGE     COMMAND   CREATED   STATUS    PORTS     NAMES"
    if action == "images":
        return "REPOSITORY   TAG       IMAGE ID       CREATED       SIZE"
    if action == "run":
        return f"docker: simulated - would run container {args[1] if len(args) > 1 else 'image'}"
    if action == "build":
        return "docker: simulated - would build image"
    return f"docker: simulated - docker command: {' '.join(args)}"


@command("kubectl", group="dev")
def kubectl(args: list[str], session: SessionState) -> str:
    if not args:
        return "kubectl: usage: kubectl [flags] [options]"
    return f"kubectl: simulated - Kubernetes command: {' '.join(args)}"
