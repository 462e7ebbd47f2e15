"""Fixed-duration segment: per-section hit counts for one reporting window."""


class Segment:
    __slots__ = ("start", "total", "hits")

    def __init__(self, start: int):
        self.start = start
        self.total = 0
        self.hits: dict[str, int] = {}

    def add(self, section: str) -> None:
        self.hits[section] = self.hits.get(section, 0) + 1
        self.total += 1

    def contains(self, timestamp: int, duration: int) -> bool:
        """True if *timestamp* still falls inside this segment.

        The boundary is inclusive: an event exactly *duration* seconds after
        the segment start belongs to the segment.
        """
        return timestamp - self.start <= duration

    def top_sections(self, n: int) -> list[tuple[str, int]]:
        """Up to *n* (section, count) pairs, busiest first.

        Equal counts are ordered by section name so the output is stable
        across runs.
        """
        if n <= 0:
            return []
        ranked = sorted(self.hits.items(), key=lambda kv: (-kv[1], kv[0]))
        return ranked[:n]

    def __len__(self) -> int:
        return self.total
