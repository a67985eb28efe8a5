"""Filter set shared by the admin view and both CSV exports."""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class LogFilters:
    """(from-date, to-date, driver substring); None means "no constraint"."""
    from_date: str | None = None
    to_date: str | None = None
    driver: str | None = None

    @classmethod
    def from_params(
        cls, from_date: str | None, to_date: str | None, driver: str | None,
    ) -> "LogFilters":
        """Build from raw query parameters; empty strings count as absent."""
        return cls(
            from_date=from_date or None,
            to_date=to_date or None,
            driver=driver or None,
        )

    def to_echo(self) -> dict[str, str]:
        """Filters as the admin view echoes them back ("" for absent)."""
        echoed = asdict(self)
        return {
            "from": echoed["from_date"] or "",
            "to": echoed["to_date"] or "",
            "driver": echoed["driver"] or "",
        }
