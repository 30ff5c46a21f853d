"""System information and administration commands.

Hardware and service listings are fixed snapshots of a small x86_64 Ubuntu
machine; identity commands (whoami, id, hostname, uname -n) read the session.
"""

from commands.registry import command
from models.seed import KNOWN_IDS
from models.session import SessionState

KERNEL_RELEASE = "5.15.0-ai"
KERNEL_VERSION = "#1 SMP Wed Jan 1 12:00:00 UTC 2025"
MACHINE = "x86_64"

LSCPU_TEXT = """Architecture:        x86_64
CPU op-mode(s):      32-bit, 64-bit
Byte Order:          Little Endian
CPU(s):              4
On-line CPU(s) list: 0-3
Thread(s) per core:  2
Core(s) per socket:  2
Socket(s):           1
NUMA node(s):        1
Vendor ID:           GenuineIntel
CPU family:          6
Model:               142
Model name:          Intel(R) Core(TM) i5-8250U CPU @ 1.60GHz
Stepping:            10
CPU MHz:             1800.000
CPU max MHz:         3400.0000
CPU min MHz:         400.0000
BogoMIPS:            3600.00
Virtualization:      VT-x
L1d cache:           32K
L1i cache:           32K
L2 cache:            256K
L3 cache:            6144K
NUMA node0 CPU(s):   0-3"""

LSBLK_TEXT = """NAME   MAJ:MIN RM  SIZE RO TYPE MOUNTPOINT
sda      8:0    0   20G  0 disk
├─sda1   8:1    0   19G  0 part /
└─sda2   8:2    0    1G  0 part [SWAP]
sr0     11:0    1 1024M  0 rom"""

LSUSB_TEXT = """Bus 002 Device 001: ID 1d6b:0003 Linux Foundation 3.0 root hub
Bus 001 Device 003: ID 8087:0a2b Intel Corp.
Bus 001 Device 002: ID 04f2:b5ce Chicony Electronics Co., Ltd
Bus 001 Device 001: ID 1d6b:0002 Linux Foundation 2.0 root hub"""

LSPCI_TEXT = """00:00.0 Host bridge: Intel Corporation Device 5904 (rev 02)
00:02.0 VGA compatible controller: Intel Corporation Device 5916 (rev 02)
00:14.0 USB controller: Intel Corporation Device 9d2f (rev 21)
00:16.0 Communication controller: Intel Corporation Device 9d3a (rev 21)
00:17.0 SATA controller: Intel Corporation Device 9d03 (rev 21)
00:1c.0 PCI bridge: Intel Corporation Device 9d10 (rev f1)
00:1f.0 ISA bridge: Intel Corporation Device 9d48 (rev 21)
00:1f.2 Memory controller: Intel Corporation Device 9d21 (rev 21)
00:1f.3 Audio device: Intel Corporation Device 9d70 (rev 21)"""

MOUNT_TEXT = """/dev/sda1 on / type ext4 (rw,relatime,errors=remount-ro)
proc on /proc type proc (rw,nosuid,nodev,noexec,relatime)
sysfs on /sys type sysfs (rw,nosuid,nodev,noexec,relatime)
devpts on /dev/pts type devpts (rw,nosuid,noexec,relatime,gid=5,mode=620,ptmxmode=000)
tmpfs on /run type tmpfs (rw,nosuid,noexec,relatime,size=819200k,mode=755)
tmpfs on /dev/shm type tmpfs (rw,nosuid,nodev)"""

FDISK_TEXT = """Disk /dev/sda: 20 GiB, 21474836480 bytes, 41943040 sectors
Units: sectors of 1 * 512 = 512 bytes
Sector size (logical/physical): 512 bytes / 512 bytes
I/O size (minimum/optimal): 512 bytes / 512 bytes
Disklabel type: dos
Disk identifier: 0x12345678

Device     Boot    Start      End  Sectors  Size Id Type
/dev/sda1  *        2048 39845887 39843840   19G 83 Linux
/dev/sda2       39845888 41943039  2097152    1G 82 Linux swap / Solaris"""

LSOF_TEXT = """COMMAND    PID USER   FD   TYPE DEVICE SIZE/OFF    NODE NAME
systemd      1 root  cwd    DIR    8,1     4096       2 /
systemd      1 root  rtd    DIR    8,1     4096       2 /
systemd      1 root  txt    REG    8,1  1595792  131586 /lib/systemd/systemd
bash       123 user  cwd    DIR    8,1     4096  262145 /home/user
bash       123 user  rtd    DIR    8,1     4096       2 /
bash       123 user  txt    REG    8,1  1113504  134567 /bin/bash"""

NETSTAT_ROWS = """Proto Recv-Q Send-Q Local Address           Foreign Address         State
tcp        0      0 0.0.0.0:22              0.0.0.0:*               LISTEN
tcp        0      0 127.0.0.1:3000          0.0.0.0:*               LISTEN
tcp        0      0 192.168.1.100:22        192.168.1.1:54321       ESTABLISHED"""

SS_TEXT = """Netid  State      Recv-Q Send-Q Local Address:Port               Peer Address:Port
tcp    LISTEN     0      128          *:22                       *:*
tcp    LISTEN     0      128    127.0.0.1:3000                   *:*
tcp    ESTAB      0      0      192.168.1.100:22               192.168.1.1:54321"""

IPTABLES_TEXT = """Chain INPUT (policy ACCEPT)
target     prot opt source               destination

Chain FORWARD (policy ACCEPT)
target     prot opt source               destination

Chain OUTPUT (policy ACCEPT)
target     prot opt source               destination"""

CRONTAB_TEXT = """# Edit this file to introduce tasks to be run by cron.
#
# m h  dom mon dow   command
0 2 * * * /usr/bin/backup.sh
30 6 * * 1 /usr/bin/weekly-report.sh"""

DF_TEXT = """Filesystem     1K-blocks    Used Available Use% Mounted on
/dev/sda1     20971520 8912896 11534336  45% /
tmpfs          2097152       0  2097152   0% /dev/shm
/dev/sda2    104857600 47185920 52428800  48% /home"""

DF_HUMAN_TEXT = """Filesystem      Size  Used Avail Use% Mounted on
/dev/sda1        20G  8.5G   11G  45% /
tmpfs           2.0G     0  2.0G   0% /dev/shm
/dev/sda2       100G   45G   50G  48% /home"""

FREE_TEXT = """              total        used        free      shared  buff/cache   available
Mem:        8192000     3276800     1536000      262144     3179520     4194304
Swap:       2097152           0     2097152"""

FREE_HUMAN_TEXT = """              total        used        free      shared  buff/cache   available
Mem:           7.8G        3.2G        1.5G        256M        3.1G        4.1G
Swap:          2.0G          0B        2.0G"""


# ===== Identity =====


@command("whoami", group="system")
def whoami(args: list[str], session: SessionState) -> str:
    return session.user


@command("id", group="system")
def user_id(args: list[str], session: SessionState) -> str:
    user = session.user
    uid = KNOWN_IDS.get(user, 1000)
    return (
        f"uid={uid}({user}) gid={uid}({user}) groups={uid}({user}),4(adm),24(cdrom),"
        "27(sudo),30(dip),46(plugdev),113(lpadmin),128(sambashare)"
    )


def current_hostname(session: SessionState) -> str:
    """Host name from /etc/hostname, falling back to the session's."""
    node = session.filesystem.lookup("/etc/hostname")
    if node is not None and node.is_file and node.content.strip():
        return node.content.strip()
    return session.hostname


@command("hostname", group="system")
def hostname(args: list[str], session: SessionState) -> str:
    if not args:
        return current_hostname(session)
    if args[0] == "-I":
        return "192.168.1.100"
    if args[0] == "-i":
        return "127.0.1.1"
    return "hostname: you must be root to change the host name"


@command("uname", group="system")
def uname(args: list[str], session: SessionState) -> str:
    """Print system information; -a or any combination of -s -n -r -v -m -p -i -o."""
    fields = {
        "s": "Linux",
        "n": current_hostname(session),
        "r": KERNEL_RELEASE,
        "v": KERNEL_VERSION,
        "m": MACHINE,
        "p": MACHINE,
        "i": MACHINE,
        "o": "GNU/Linux",
    }

    selected: set[str] = set()
    for arg in args:
        if not arg.startswith("-") or arg == "-":
            return f"uname: extra operand '{arg}'"
        for letter in arg[1:]:
            if letter == "a":
                selected.update(fields)
            elif letter in fields:
                selected.add(letter)
            else:
                return f"uname: invalid option -- '{letter}'"

    if not selected:
        selected.add("s")
    return " ".join(value for letter, value in fields.items() if letter in selected)


# ===== Time =====


@command("date", group="system")
def date(args: list[str], session: SessionState) -> str:
    """Print the session clock in date(1)'s default format."""
    now = session.now()
    zone = now.strftime("%Z") or "UTC"
    return f"{now:%a %b} {now.day:>2} {now:%H:%M:%S} {zone} {now.year}"


@command("uptime", group="system")
def uptime(args: list[str], session: SessionState) -> str:
    seconds = session.rng.randint(3600, 89999)
    hours, minutes = seconds // 3600, (seconds % 3600) // 60
    loads = ", ".join(f"{session.rng.uniform(0, 2):.2f}" for _ in range(3))
    return f"{session.now():%H:%M:%S} up {hours}:{minutes:02d}, 1 user, load average: {loads}"


# ===== Hardware and storage =====


@command("df", group="system")
def df(args: list[str], session: SessionState) -> str:
    return DF_HUMAN_TEXT if "-h" in args else DF_TEXT


@command("free", group="system")
def free(args: list[str], session: SessionState) -> str:
    return FREE_HUMAN_TEXT if "-h" in args else FREE_TEXT


@command("lscpu", group="system")
def lscpu(args: list[str], session: SessionState) -> str:
    return LSCPU_TEXT


@command("lsblk", group="system")
def lsblk(args: list[str], session: SessionState) -> str:
    return LSBLK_TEXT


@command("lsusb", group="system")
def lsusb(args: list[str], session: SessionState) -> str:
    return LSUSB_TEXT


@command("lspci", group="system")
def lspci(args: list[str], session: SessionState) -> str:
    return LSPCI_TEXT


@command("mount", group="system")
def mount(args: list[str], session: SessionState) -> str:
    if not args:
        return MOUNT_TEXT
    return f"mount: simulated - would mount {' '.join(args)}"


@command("umount", group="system")
def umount(args: list[str], session: SessionState) -> str:
    if not args:
        return "umount: usage: umount [-hV]"
    return f"umount: simulated - would unmount {args[0]}"


@command("fdisk", group="system")
def fdisk(args: list[str], session: SessionState) -> str:
    if "-l" in args:
        return FDISK_TEXT
    return "fdisk: usage: fdisk [options] <disk>"


@command("lsof", group="system")
def lsof(args: list[str], session: SessionState) -> str:
    return LSOF_TEXT


# ===== Network state =====


@command("netstat", group="system")
def netstat(args: list[str], session: SessionState) -> str:
    header = "Active Internet connections"
    if any(arg.startswith("-") and "l" in arg for arg in args):
        header += " (only servers)"
    return f"{header}\n{NETSTAT_ROWS}"


@command("ss", group="system")
def ss(args: list[str], session: SessionState) -> str:
    return SS_TEXT


@command("iptables", group="system")
def iptables(args: list[str], session: SessionState) -> str:
    if "-L" in args:
        return IPTABLES_TEXT
    return "iptables: simulated - packet filtering and NAT"


# ===== Services =====


@command("systemctl", group="system")
def systemctl(args: list[str], session: SessionState) -> str:
    if not args:
        return "systemctl: usage: systemctl [OPTIONS...] {COMMAND} ..."

    action = args[0]
    unit = args[1] if len(args) > 1 else None
    if action == "status":
        name = unit or "system"
        return (
            f"● {name}.service - System Service\n"
            f"   Loaded: loaded (/lib/systemd/system/{name}.service; enabled; vendor preset: enabled)\n"
            "   Active: active (running) since Mon 2024-01-01 12:00:00 UTC; 2h 30min ago\n"
            f" Main PID: 1234 ({name})\n"
            "    Tasks: 1 (limit: 4915)\n"
            "   Memory: 2.3M\n"
            f"   CGroup: /system.slice/{name}.service\n"
            f"           └─1234 /usr/bin/{name}"
        )
    if action == "list-units":
        return (
            "UNIT                     LOAD   ACTIVE SUB     DESCRIPTION\n"
            "system.service           loaded active running System Service\n"
            "network.service          loaded active running Network Service\n"
            "ssh.service              loaded active running OpenBSD Secure Shell server"
        )
    if action in ("start", "stop", "restart", "reload"):
        return f"systemctl: simulated - would {action} {unit or 'service'}"
    return f"systemctl: unknown command '{action}'"


@command("service", group="system")
def service(args: list[str], session: SessionState) -> str:
    if len(args) < 2:
        return (
            "service: usage: service < option > | --status-all | "
            "[ service_name [ command | --full-restart ] ]"
        )
    return f"service: simulated - would {args[1]} {args[0]}"


@command("crontab", group="system")
def crontab(args: list[str], session: SessionState) -> str:
    if "-l" in args:
        return CRONTAB_TEXT
    if "-e" in args:
        return "crontab: simulated - would open crontab editor"
    return "crontab: usage: crontab [-u user] file"
