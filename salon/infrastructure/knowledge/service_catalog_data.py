from __future__ import annotations

from salon.domain.entities.service_catalog import Service

# Prices in the smallest currency unit. Declared order is catalog order.
SERVICE_CATALOG: tuple[Service, ...] = (
    Service(id="1", name="Haircut ✂️", price=500),
    Service(id="2", name="Beard Trim 🧔", price=300),
    Service(id="3", name="Hair Coloring 🎨", price=800),
    Service(id="4", name="Scalp Treatment 💆", price=700),
    Service(id="5", name="Hot Towel Shave 🔥", price=400),
)
