from typing import List, Sequence

from pydantic import BaseModel


class LineItem(BaseModel):
    name: str
    order: str


class OrderOverview:
    """Orders of one day, index-aligned with the participant names of the header row."""

    def __init__(self, names: Sequence[str], orders: Sequence[str]):
        if len(names) != len(orders):
            raise ValueError(f"got {len(names)} names but {len(orders)} orders")
        self.names = list(names)
        self.orders = list(orders)

    def line_items(self) -> List[LineItem]:
        items = []
        for name, order in zip(self.names, self.orders):
            name, order = name.strip(), order.strip()
            if name and order:
                items.append(LineItem(name=name, order=order))
        return sorted(items, key=lambda item: item.name)

    def max_count(self) -> int:
        return len(self.names)

    def order_count(self) -> int:
        return len(self.line_items())

    def did_not_order_count(self) -> int:
        return self.max_count() - self.order_count()

    def order_percent(self) -> float:
        return self._percent_of_slots(self.order_count())

    def did_not_order_percent(self) -> float:
        return self._percent_of_slots(self.did_not_order_count())

    def summary(self) -> str:
        # Example: Joe: BLT Sandwich
        return "".join(f"{item.name}: {item.order}\n" for item in self.line_items())

    def _percent_of_slots(self, count: int) -> float:
        if self.max_count() == 0:
            return 0.0
        return 100 * count / self.max_count()
