"""Network commands (simulated).

Nothing here touches the network. ping produces randomized round-trip
times from session.rng with a statistics line computed from them; the
resolver tools answer with fixed example.com-style records.
"""

import math

from commands.arguments import parse_args, parse_int
from commands.registry import command
from models.session import SessionState

EXAMPLE_ADDRESS = "93.184.216.34"

# ping -c stops after this many packets
MAX_PING_COUNT = 1000


@command("ping", group="network")
def ping(args: list[str], session: SessionState) -> str:
    """Simulate ping [-c COUNT] HOST (4 packets by default)."""
    parsed = parse_args(args, value_options="cWi")
    if parsed.missing_value:
        return f"ping: option requires an argument -- '{parsed.missing_value}'"
    if not parsed.operands:
        return "ping: usage error: Destination address required"

    host = parsed.operands[0]
    count = parse_int(parsed.values.get("c"), default=4)
    if count is None or count <= 0:
        return f"ping: invalid argument: '{parsed.values.get('c')}'"
    count = min(count, MAX_PING_COUNT)

    times = [round(session.rng.uniform(1, 11), 1) for _ in range(count)]
    lines = [f"PING {host} (127.0.0.1) 56(84) bytes of data."]
    for sequence, time in enumerate(times, 1):
        lines.append(
            f"64 bytes from {host} (127.0.0.1): icmp_seq={sequence} ttl=64 time={time} ms"
        )

    average = sum(times) / count
    mdev = math.sqrt(max(sum(t * t for t in times) / count - average * average, 0.0))
    lines.extend(
        [
            "",
            f"--- {host} ping statistics ---",
            f"{count} packets transmitted, {count} received, 0% packet loss, time {count * 1000}ms",
            f"rtt min/avg/max/mdev = {min(times):.3f}/{average:.3f}/{max(times):.3f}/{mdev:.3f} ms",
        ]
    )
    return "\n".join(lines)


@command("wget", group="network")
def wget(args: list[str], session: SessionState) -> str:
    if not args:
        return "wget: missing URL"
    return f"wget: simulated - would download {args[0]}"


@command("curl", group="network")
def curl(args: list[str], session: SessionState) -> str:
    if not args:
        return "curl: try 'curl --help' for more information"
    return f"curl: simulated - would fetch {args[-1]}"


@command("ssh", group="network")
def ssh(args: list[str], session: SessionState) -> str:
    if not args:
        return "ssh: usage: ssh [-46AaCfGgKkMNnqsTtVvXxYy] destination [command]"
    return f"ssh: simulated - would connect to {args[0]}"


@command("scp", group="network")
def scp(args: list[str], session: SessionState) -> str:
    if len(args) < 2:
        return "scp: usage: scp [-346BCpqrv] [-c cipher] [-F ssh_config] source target"
    return "scp: simulated - would copy files securely"


@command("rsync", group="network")
def rsync(args: list[str], session: SessionState) -> str:
    if len(args) < 2:
        return "rsync: usage: rsync [OPTION]... SRC [SRC]... DEST"
    return "rsync: simulated - would synchronize files"


@command("nc", group="network")
def nc(args: list[str], session: SessionState) -> str:
    if not args:
        return "nc: usage: nc [-46bCDdhjklnrStUuvZz] [-I length] [-i interval] hostname port"
    return "nc: simulated - netcat utility"


@command("telnet", group="network")
def telnet(args: list[str], session: SessionState) -> str:
    host = args[0] if args else "localhost"
    port = args[1] if len(args) > 1 else "23"
    return f"telnet: simulated - would connect to {host}:{port}"


@command("nslookup", group="network")
def nslookup(args: list[str], session: SessionState) -> str:
    host = args[0] if args else "example.com"
    return (
        "Server:\t\t8.8.8.8\n"
        "Address:\t8.8.8.8#53\n"
        "\n"
        "Non-authoritative answer:\n"
        f"Name:\t{host}\n"
        f"Address: {EXAMPLE_ADDRESS}"
    )


@command("dig", group="network")
def dig(args: list[str], session: SessionState) -> str:
    host = args[0] if args else "example.com"
    return (
        f"; <<>> DiG 9.16.1-Ubuntu <<>> {host}\n"
        ";; global options: +cmd\n"
        ";; Got answer:\n"
        ";; ->>HEADER<<- opcode: QUERY, status: NOERROR, id: 12345\n"
        ";; flags: qr rd ra; QUERY: 1, ANSWER: 1, AUTHORITY: 0, ADDITIONAL: 1\n"
        "\n"
        ";; QUESTION SECTION:\n"
        f";{host}.\t\t\tIN\tA\n"
        "\n"
        ";; ANSWER SECTION:\n"
        f"{host}.\t\t300\tIN\tA\t{EXAMPLE_ADDRESS}\n"
        "\n"
        ";; Query time: 15 msec\n"
        ";; SERVER: 8.8.8.8#53(8.8.8.8)\n"
        ";; WHEN: Mon Jan 01 12:00:00 UTC 2024\n"
        ";; MSG SIZE  rcvd: 55"
    )


@command("host", group="network")
def host(args: list[str], session: SessionState) -> str:
    name = args[0] if args else "example.com"
    return (
        f"{name} has address {EXAMPLE_ADDRESS}\n"
        f"{name} has IPv6 address 2606:2800:220:1:248:1893:25c8:1946\n"
        f"{name} mail is handled by 0 ."
    )


@command("traceroute", group="network")
def traceroute(args: list[str], session: SessionState) -> str:
    target = args[0] if args else "example.com"
    return (
        f"traceroute to {target} ({EXAMPLE_ADDRESS}), 30 hops max, 60 byte packets\n"
        " 1  gateway (192.168.1.1)  1.234 ms  1.123 ms  1.456 ms\n"
        " 2  10.0.0.1 (10.0.0.1)  5.678 ms  5.432 ms  5.789 ms\n"
        " 3  * * *\n"
        f" 4  {EXAMPLE_ADDRESS} ({EXAMPLE_ADDRESS})  15.123 ms  15.456 ms  15.789 ms"
    )


@command("mtr", group="network")
def mtr(args: list[str], session: SessionState) -> str:
    target = args[0] if args else "example.com"
    return (
        "                             My traceroute  [v0.93]\n"
        "ai-terminal (192.168.1.100)                    Mon Jan  1 12:00:00 2024\n"
        "Keys:  Help   Display mode   Restart statistics   Order of fields   quit\n"
        "                                           Packets               Pings\n"
        " Host                                    Loss%   Snt   Last   Avg  Best  Wrst StDev\n"
        " 1. gateway                               0.0%    10    1.2   1.3   1.1   1.5   0.1\n"
        " 2. 10.0.0.1                              0.0%    10    5.6   5.7   5.4   6.1   0.2\n"
        f" 3. {target:<38}0.0%    10   15.1  15.2  14.9  15.8   0.3"
    )
