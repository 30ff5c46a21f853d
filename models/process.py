"""Simulated process table models."""

from typing import Optional

from pydantic import BaseModel, Field


class ProcessRecord(BaseModel):
    """A simulated process as shown by ps/top.

    Args:
        pid: Process identifier.
        name: Command name.
        cpu_percent: CPU usage percentage.
        mem_percent: Memory usage percentage.
        user: Owning user.
        status: Single-letter process state code (R, S, T, Z...).
    """

    pid: int = Field(ge=0, description="Process identifier")
    name: str = Field(description="Command name")
    cpu_percent: float = Field(default=0.0, ge=0, description="CPU usage percentage")
    mem_percent: float = Field(default=0.0, ge=0, description="Memory usage percentage")
    user: str = Field(description="Owning user")
    status: str = Field(default="S", description="Process state code")

    def to_dict(self) -> dict:
        """Convert process record to dictionary for API responses."""
        return {
            "pid": self.pid,
            "name": self.name,
            "cpu_percent": self.cpu_percent,
            "mem_percent": self.mem_percent,
            "user": self.user,
            "status": self.status,
        }


class ProcessTable(BaseModel):
    """Ordered, mutable list of simulated processes.

    Args:
        processes: Process records in display order.
        next_pid: PID handed to the next spawned process.
    """

    processes: list[ProcessRecord] = Field(default_factory=list)
    next_pid: int = Field(default=1000, description="Next PID to allocate")

    def __len__(self) -> int:
        return len(self.processes)

    def __iter__(self):
        return iter(self.processes)

    def find(self, pid: int) -> Optional[ProcessRecord]:
        """Return the process with the given PID, if any."""
        for process in self.processes:
            if process.pid == pid:
                return process
        return None

    def find_by_name(self, name: str) -> list[ProcessRecord]:
        return [process for process in self.processes if process.name == name]

    def owned_by(self, user: str) -> list[ProcessRecord]:
        return [process for process in self.processes if process.user == user]

    def count_by_status(self, status: str) -> int:
        return sum(1 for process in self.processes if process.status == status)

    def remove(self, pid: int) -> Optional[ProcessRecord]:
        """Remove the process with the given PID.

        Args:
            pid: PID to remove.

        Returns:
            The removed record, or None if no such process exists.
        """
        process = self.find(pid)
        if process is not None:
            self.processes.remove(process)
        return process

    def remove_by_name(self, name: str) -> list[ProcessRecord]:
        """Remove every process with the given name and return them."""
        removed = self.find_by_name(name)
        self.processes = [process for process in self.processes if process.name != name]
        return removed

    def spawn(self, name: str, user: str, status: str = "S") -> ProcessRecord:
        """Add a new process with the next free PID.

        Args:
            name: Command name.
            user: Owning user.
            status: Initial state code.

        Returns:
            The new process record.
        """
        while self.find(self.next_pid) is not None:
            self.next_pid += 1
        process = ProcessRecord(
            pid=self.next_pid,
            name=name,
            cpu_percent=0.0,
            mem_percent=0.1,
            user=user,
            status=status,
        )
        self.next_pid += 1
        self.processes.append(process)
        return process
