"""Job-shop scheduling problem (JSSP) instances.

Instances use the usual literature text format: a first line holding the
number of jobs `n` and machines `m`, followed by one line per job listing
its `m` operations in processing order as `machine time` pairs, separated
by spaces or tabs. Machines and jobs are 0-indexed.

A schedule is a sequence of job indices where the k-th occurrence of a
job stands for its k-th operation, e.g. `0 1 0 2 0 1 1 2` for 3 jobs.
"""

from __future__ import annotations

import os
from typing import Iterable, List, Sequence

import torch

import whaleopt.utils.exception as e
from whaleopt.utils import logging

logger = logging.get_logger(__name__)

INSTANCES_DIR = os.path.join(os.path.dirname(__file__), "instances")


class JSSPInstance:
    """Holds the machine sequences and processing times of a JSSP instance.

    `sequences[j][k]` is the machine of the k-th operation of job `j`, while
    `processing_times[j][i]` is the time job `j` spends on machine `i`.
    """

    def __init__(
        self,
        sequences: Sequence[Sequence[int]],
        processing_times: Sequence[Sequence[int]],
        name: str = "custom",
    ) -> None:
        """Initialization method.

        Args:
            sequences: Machine order of every job, shape (n_jobs, n_machines).
            processing_times: Time of every job on every machine, shape (n_jobs, n_machines).
            name: Instance name.
        """

        self.sequences = [list(s) for s in sequences]
        self.processing_times = [list(p) for p in processing_times]
        self.name = name

        self._validate()

        logger.debug(
            "Instance: %s | Jobs: %d | Machines: %d.", self.name, self.n_jobs, self.n_machines
        )

    def _validate(self) -> None:
        if not self.sequences:
            raise e.SizeError("`sequences` should hold at least one job")
        if len(self.processing_times) != len(self.sequences):
            raise e.SizeError("`sequences` and `processing_times` should have the same number of jobs")

        n_machines = len(self.sequences[0])
        machines = list(range(n_machines))

        for j, (seq, times) in enumerate(zip(self.sequences, self.processing_times)):
            if len(seq) != n_machines or len(times) != n_machines:
                raise e.SizeError(f"job {j} should have exactly {n_machines} operations")
            if sorted(seq) != machines:
                raise e.ValueError(f"job {j} should visit every machine exactly once")
            if any(t < 0 for t in times):
                raise e.ValueError(f"job {j} should not have negative processing times")

    @property
    def n_jobs(self) -> int:
        return len(self.sequences)

    @property
    def n_machines(self) -> int:
        return len(self.sequences[0])

    @property
    def n_operations(self) -> int:
        return self.n_jobs * self.n_machines

    @classmethod
    def from_text(cls, text: str, name: str = "custom") -> JSSPInstance:
        """Parses an instance from its text representation.

        Args:
            text: Instance contents.
            name: Instance name.

        Returns:
            Parsed instance.
        """

        try:
            lines = [
                [int(v) for v in line.replace("\t", " ").split()]
                for line in text.splitlines()
                if line.strip()
            ]
        except ValueError as ex:
            raise e.ValueError(f"instance `{name}` should only hold integers") from ex

        if not lines or len(lines[0]) != 2:
            raise e.SizeError(f"instance `{name}` should start with an `n m` line")

        (n, m), rows = lines[0], lines[1:]
        if len(rows) != n:
            raise e.SizeError(f"instance `{name}` should have {n} job lines, got {len(rows)}")

        sequences: List[List[int]] = []
        processing_times: List[List[int]] = []

        for j, row in enumerate(rows):
            if len(row) != 2 * m:
                raise e.SizeError(f"job {j} of `{name}` should have {m} (machine, time) pairs")

            seq = row[0::2]
            if sorted(seq) != list(range(m)):
                raise e.ValueError(f"job {j} of `{name}` should visit every machine exactly once")

            times = [0] * m
            for machine, time in zip(seq, row[1::2]):
                times[machine] = time

            sequences.append(seq)
            processing_times.append(times)

        return cls(sequences, processing_times, name=name)

    @classmethod
    def from_file(cls, file_path: str) -> JSSPInstance:
        """Reads an instance from a text file, named after the file."""

        with open(file_path, "r") as f:
            text = f.read()

        name = os.path.splitext(os.path.basename(file_path))[0]

        return cls.from_text(text, name=name)

    @classmethod
    def from_instance(cls, name: str, directory: str = INSTANCES_DIR) -> JSSPInstance:
        """Reads a named instance from `directory` (bundled instances by default)."""

        file_path = os.path.join(directory, f"{name}.txt")
        if not os.path.isfile(file_path):
            raise e.ArgumentError(f"instance `{name}` was not found in `{directory}`")

        return cls.from_file(file_path)

    @staticmethod
    def available_instances(directory: str = INSTANCES_DIR) -> List[str]:
        """Lists the instance names found in `directory`."""

        return sorted(
            os.path.splitext(f)[0] for f in os.listdir(directory) if f.endswith(".txt")
        )

    def calculate_makespan(self, schedule: Iterable[int]) -> int:
        """Calculates the makespan of a schedule.

        Operations are placed in the order they appear, each one starting as
        soon as both its job and its machine are free.

        Args:
            schedule: Job indices, every job appearing exactly `n_machines` times.

        Returns:
            Completion time of the last job.
        """

        if isinstance(schedule, torch.Tensor):
            schedule = schedule.tolist()

        operations = [0] * self.n_jobs
        job_time = [0] * self.n_jobs
        machine_time = [0] * self.n_machines

        for job in schedule:
            job = int(job)
            if not 0 <= job < self.n_jobs:
                raise e.ValueError(f"job index {job} should be in [0, {self.n_jobs})")
            if operations[job] == self.n_machines:
                raise e.ValueError(f"job {job} should appear exactly {self.n_machines} times")

            machine = self.sequences[job][operations[job]]
            start = max(job_time[job], machine_time[machine])
            finish = start + self.processing_times[job][machine]

            job_time[job] = finish
            machine_time[machine] = finish
            operations[job] += 1

        if any(o != self.n_machines for o in operations):
            raise e.ValueError(f"every job should appear exactly {self.n_machines} times")

        return max(job_time)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JSSPInstance):
            return NotImplemented
        return (
            self.sequences == other.sequences
            and self.processing_times == other.processing_times
        )

    def __repr__(self) -> str:
        return f"JSSPInstance(name={self.name}, n_jobs={self.n_jobs}, n_machines={self.n_machines})"
