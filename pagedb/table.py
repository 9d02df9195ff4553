"""Paged on-disk storage for rows."""

from __future__ import annotations

import os

from pagedb.row import ROW_SIZE, SERIALIZED_SIZE

TABLE_MAX_PAGES = 100
PAGE_SIZE = 4096
ROWS_PER_PAGE = PAGE_SIZE // ROW_SIZE
TABLE_MAX_ROWS = ROWS_PER_PAGE * TABLE_MAX_PAGES


class PagerError(Exception):
    """Raised when the database file or its page cache cannot be used."""


class Pager:
    """Caches fixed-size pages of the database file in memory."""

    def __init__(self, filename: str | os.PathLike[str]) -> None:
        try:
            fd = os.open(filename, os.O_RDWR | os.O_CREAT, 0o600)
        except OSError as exc:
            raise PagerError("Unable to open file") from exc
        try:
            self._file = open(fd, "r+b", buffering=0)
        except OSError as exc:
            os.close(fd)
            raise PagerError("Unable to open file") from exc
        self.file_length = self._file.seek(0, os.SEEK_END)
        self.pages: list[bytearray | None] = [None] * TABLE_MAX_PAGES

    def get_page(self, page_number: int) -> bytearray:
        """Return the cached page, loading it from the file on a miss."""
        if not 0 <= page_number < TABLE_MAX_PAGES:
            raise PagerError(
                f"Tried to fetch page number out of bounds. {TABLE_MAX_PAGES}"
            )
        page = self.pages[page_number]
        if page is None:
            page = bytearray(PAGE_SIZE)
            num_pages, partial = divmod(self.file_length, PAGE_SIZE)
            if partial:
                num_pages += 1
            if page_number <= num_pages:
                try:
                    self._file.seek(page_number * PAGE_SIZE)
                    data = self._file.read(PAGE_SIZE) or b""
                except OSError as exc:
                    raise PagerError("Error reading file.") from exc
                page[:len(data)] = data
            self.pages[page_number] = page
        return page

    def flush(self, page_number: int, size: int) -> None:
        """Write the first ``size`` bytes of a cached page back to the file."""
        page = self.pages[page_number]
        if page is None:
            raise PagerError("Tried to flush null page")
        try:
            self._file.seek(page_number * PAGE_SIZE)
        except OSError as exc:
            raise PagerError(f"Error seeking: {exc.errno}") from exc
        try:
            self._file.write(page[:size])
        except OSError as exc:
            raise PagerError(f"Error flushing(writing): {exc.errno}") from exc

    def close(self) -> None:
        """Close the file and drop every cached page."""
        try:
            self._file.close()
        except OSError as exc:
            raise PagerError("Error closing db file.") from exc
        finally:
            self.pages = [None] * TABLE_MAX_PAGES


class Table:
    """A table of rows stored back to back in a paged file."""

    def __init__(self, filename: str | os.PathLike[str]) -> None:
        self.pager = Pager(filename)
        self.num_of_rows = self.pager.file_length // ROW_SIZE

    def row_slot(self, row_number: int) -> memoryview:
        """Return a writable view of the bytes where ``row_number`` lives."""
        page_number, row_offset = divmod(row_number, ROWS_PER_PAGE)
        page = self.pager.get_page(page_number)
        byte_offset = row_offset * ROW_SIZE
        return memoryview(page)[byte_offset:byte_offset + SERIALIZED_SIZE]

    def close(self) -> None:
        """Write all rows to disk and close the file."""
        pager = self.pager
        num_full_pages, num_additional_rows = divmod(self.num_of_rows, ROWS_PER_PAGE)

        for page_number in range(num_full_pages):
            if pager.pages[page_number] is None:
                continue
            pager.flush(page_number, PAGE_SIZE)
            pager.pages[page_number] = None

        if num_additional_rows > 0 and pager.pages[num_full_pages] is not None:
            pager.flush(num_full_pages, num_additional_rows * ROW_SIZE)
            pager.pages[num_full_pages] = None

        pager.close()

    def __enter__(self) -> Table:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def db_open(filename: str | os.PathLike[str]) -> Table:
    """Open (or create) the database file and return its table."""
    return Table(filename)


def db_close(table: Table) -> None:
    """Flush and close ``table``."""
    table.close()