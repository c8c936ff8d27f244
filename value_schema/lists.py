"""Option lists for drop-down style fields. Plain data, no validation logic."""
from dataclasses import dataclass

LIST_TYPES = ("simple", "keyed", "runtime")


@dataclass
class ListEntry:
    """Internal value and the text displayed for it."""

    value: str | int
    text: str

    def __str__(self):
        return f"{self.text} ({self.value})"

    def to_dict(self):
        return {"value": self.value, "text": self.text}

    @staticmethod
    def from_dict(data):
        return ListEntry(value=data["value"], text=data["text"])


SimpleList = list[ListEntry]
# options per key, e.g. states per country
KeyedList = dict[str, SimpleList]
KeyedLists = dict[str, KeyedList]


@dataclass
class ListSource:
    name: str
    list_type: str
    is_keyed: bool = False
    list: SimpleList | None = None
    keyed_lists: KeyedList | None = None

    def __post_init__(self):
        if self.list_type not in LIST_TYPES:
            raise ValueError(f"Invalid list type: {self.list_type}")
        self.is_keyed = bool(self.is_keyed or self.keyed_lists)

    def entries_for(self, key: str | None = None) -> SimpleList:
        """Options to show: the simple list, or the keyed list for ``key``."""
        if not self.is_keyed:
            return self.list or []
        return (self.keyed_lists or {}).get(key, [])

    def to_dict(self):
        """Convert list source to dictionary for JSON serialization."""
        data = {"name": self.name, "listType": self.list_type, "isKeyed": self.is_keyed}
        if self.list is not None:
            data["list"] = [entry.to_dict() for entry in self.list]
        if self.keyed_lists is not None:
            data["keyedLists"] = {
                key: [entry.to_dict() for entry in entries] for key, entries in self.keyed_lists.items()
            }
        return data

    @staticmethod
    def from_dict(data):
        """Create list source from dictionary (JSON deserialization)."""
        simple = data.get("list")
        keyed = data.get("keyedLists")
        return ListSource(
            name=data["name"],
            list_type=data.get("listType", "simple"),
            is_keyed=data.get("isKeyed", False),
            list=[ListEntry.from_dict(e) for e in simple] if simple is not None else None,
            keyed_lists=(
                {key: [ListEntry.from_dict(e) for e in entries] for key, entries in keyed.items()}
                if keyed is not None
                else None
            ),
        )
