from screenings.stores.interfaces import (
    MovieCatalog,
    RoomDirectory,
    ScreeningRepository,
    TicketStore,
)

__all__ = [
    "MovieCatalog",
    "RoomDirectory",
    "ScreeningRepository",
    "TicketStore",
]
