"""GTFS feed reader for loading the layer tables into memory."""

import csv
import io
import logging
import zipfile
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO

logger = logging.getLogger(__name__)

# Table definitions: table_name -> (csv_filename, columns)
TABLE_DEFINITIONS: dict[str, tuple[str, list[str]]] = {
    "routes": (
        "routes.txt",
        [
            "route_id",
            "route_short_name",
            "route_long_name",
            "route_desc",
            "route_type",
            "route_url",
            "route_color",
            "route_text_color",
        ],
    ),
    "trips": ("trips.txt", ["trip_id", "route_id", "shape_id"]),
    "shapes": (
        "shapes.txt",
        ["shape_id", "shape_pt_lon", "shape_pt_lat", "shape_pt_sequence"],
    ),
    "stops": (
        "stops.txt",
        [
            "stop_id",
            "stop_name",
            "stop_lon",
            "stop_lat",
            "stop_code",
            "stop_desc",
            "zone_id",
            "stop_url",
            "location_type",
            "parent_station",
            "wheelchair_boarding",
        ],
    ),
    "stop_times": ("stop_times.txt", ["trip_id", "stop_id"]),
}

RawRow = dict[str, str]


@dataclass
class FeedTables:
    """Raw feed rows, one list of string dicts per table.

    A table missing from the feed is an empty list.
    """

    routes: list[RawRow] = field(default_factory=list)
    trips: list[RawRow] = field(default_factory=list)
    shapes: list[RawRow] = field(default_factory=list)
    stops: list[RawRow] = field(default_factory=list)
    stop_times: list[RawRow] = field(default_factory=list)

    def row_counts(self) -> dict[str, int]:
        """Row counts per table."""
        return {name: len(getattr(self, name)) for name in TABLE_DEFINITIONS}


class FeedLoader:
    """Loader for reading GTFS tables from a directory or ZIP file."""

    def load(self, gtfs_path: Path) -> FeedTables:
        """Load the layer tables from a GTFS directory or ZIP file.

        Args:
            gtfs_path: Path to GTFS directory or ZIP file.

        Returns:
            FeedTables holding every row of the known tables.

        Raises:
            FileNotFoundError: If GTFS path doesn't exist.
            ValueError: If the path is neither a directory nor a readable ZIP.
        """
        gtfs_path = Path(gtfs_path)
        if not gtfs_path.exists():
            raise FileNotFoundError(f"GTFS path not found: {gtfs_path}")

        if gtfs_path.is_dir():
            tables = self._load_from_directory(gtfs_path)
        elif zipfile.is_zipfile(gtfs_path):
            try:
                with zipfile.ZipFile(gtfs_path, "r") as zf:
                    tables = self._load_from_zip(zf)
            except zipfile.BadZipFile as e:
                raise ValueError(f"Unreadable GTFS archive: {gtfs_path}") from e
        else:
            raise ValueError(f"Not a GTFS directory or ZIP file: {gtfs_path}")

        logger.info(f"GTFS feed loaded from {gtfs_path}: {tables.row_counts()}")
        return tables

    def _load_from_directory(self, gtfs_dir: Path) -> FeedTables:
        tables = FeedTables()
        for table_name, (csv_filename, columns) in TABLE_DEFINITIONS.items():
            csv_path = gtfs_dir / csv_filename
            if not csv_path.exists():
                logger.warning(f"{csv_filename} not found, {table_name} will be empty")
                continue
            logger.info(f"Loading {table_name} from {csv_filename}...")
            with open(csv_path, encoding="utf-8-sig", newline="") as f:
                setattr(tables, table_name, self._read_rows(f, columns))
        return tables

    def _load_from_zip(self, zf: zipfile.ZipFile) -> FeedTables:
        tables = FeedTables()
        members = self._member_index(zf.namelist())
        for table_name, (csv_filename, columns) in TABLE_DEFINITIONS.items():
            member = members.get(csv_filename)
            if member is None:
                logger.warning(f"{csv_filename} not found in ZIP, {table_name} will be empty")
                continue
            logger.info(f"Loading {table_name} from {member}...")
            with zf.open(member) as f:
                text_file = io.TextIOWrapper(f, encoding="utf-8-sig", newline="")
                setattr(tables, table_name, self._read_rows(text_file, columns))
        return tables

    def _member_index(self, names: Iterable[str]) -> dict[str, str]:
        """Map bare file names to archive members.

        Feeds are often zipped together with their parent folder, so the
        shallowest match wins.
        """
        index: dict[str, str] = {}
        for name in sorted(names, key=lambda n: n.count("/")):
            if name.endswith("/"):
                continue
            index.setdefault(name.rsplit("/", 1)[-1], name)
        return index

    def _read_rows(self, f: IO[str], columns: list[str]) -> list[RawRow]:
        """Read the requested columns from a CSV stream.

        Columns absent from the header come back as empty strings; the
        record parsers treat those as missing values.
        """
        reader = csv.reader(f)
        header = next(reader, None)
        if header is None:
            return []
        header_index = self._build_header_index(header, columns)
        rows: list[RawRow] = []
        for row in reader:
            if not any(cell.strip() for cell in row):
                continue
            rows.append({col: self._cell(row, header_index.get(col)) for col in columns})
        return rows

    def _build_header_index(self, header: list[str], columns: list[str]) -> dict[str, int]:
        """Map expected column names to their position in the header."""
        expected = set(columns)
        header_index: dict[str, int] = {}
        for idx, name in enumerate(header):
            cleaned = name.strip()
            if cleaned in expected and cleaned not in header_index:
                header_index[cleaned] = idx
        return header_index

    def _cell(self, row: list[str], idx: int | None) -> str:
        if idx is None or idx >= len(row):
            return ""
        return row[idx]


def load_feed(gtfs_path: Path) -> FeedTables:
    """Load a GTFS feed from a directory or ZIP file."""
    return FeedLoader().load(gtfs_path)
