"""
Update info value object.
"""
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class UpdateInfo:
    """An available upgrade for a plugin slug/version pair."""

    version: str
    download_url: str = ""
    changelog: str = ""
    min_host_version: str = ""
    tested_host_version: str = ""

    @classmethod
    def from_api(cls, data: Optional[Mapping[str, Any]]) -> Optional["UpdateInfo"]:
        """
        Build from the ``update`` object of a check response.

        Args:
            data: Update payload; None (or empty) means "up to date"

        Returns:
            UpdateInfo or None
        """
        if not data or not isinstance(data, Mapping):
            return None
        return cls(
            version=str(data.get("version") or ""),
            download_url=str(data.get("download_url") or ""),
            changelog=str(data.get("changelog") or ""),
            min_host_version=str(data.get("min_host_version") or data.get("min_wp") or ""),
            tested_host_version=str(
                data.get("tested_host_version") or data.get("tested_wp") or ""
            ),
        )

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)
