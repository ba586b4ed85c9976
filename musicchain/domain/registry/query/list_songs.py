"""ListSongs query handler - read the local catalog, optionally per registrant."""

from datetime import datetime

from musicchain.domain.registry.model.record import Record
from musicchain.domain.registry.service.catalog import RecordCatalog
from musicchain.domain.shared.model.value import Address
from musicchain.domain.shared.query import Query, QueryHandler, Result


class ListSongs(Query):
    registrant: Address | None = None


class SongList(Result):
    songs: list[Record]
    total: int
    complete: bool  # False until a full refresh has succeeded
    refreshed_at: datetime | None = None
    error: str | None = None


class ListSongsHandler(QueryHandler[ListSongs, SongList]):
    catalog: RecordCatalog

    async def run(self, query: ListSongs) -> SongList:
        if query.registrant is not None:
            songs = self.catalog.filter_by_registrant(query.registrant)
        else:
            songs = list(self.catalog.records)
        error = self.catalog.last_error
        return SongList(
            songs=songs,
            total=len(songs),
            complete=self.catalog.loaded and error is None,
            refreshed_at=self.catalog.refreshed_at,
            error=error.message if error else None,
        )
