"""
Test data loading for data-driven tests.

CSV sources are returned row for row, exactly as the file holds them: no
header skipping and no field-count checks. Spreadsheet sheets treat the
first row as column titles and return the rows below it.
"""

import csv
from pathlib import Path
from typing import List, Optional, Tuple

from openpyxl import load_workbook

from ..constants import TEST_DATA_WORKBOOK
from ..core.exceptions import DataSourceNotFoundError
from ..core.logging_config import get_logger


DataRow = Tuple[str, ...]

logger = get_logger(__name__)


class DataProvider:
    """
    Loads named data sources from a test data directory.

    Args:
        data_dir: Directory holding ``<name>.csv`` files and the workbook
        workbook: File name of the spreadsheet used by ``excel_data``
    """

    def __init__(self, data_dir: Path, workbook: str = TEST_DATA_WORKBOOK):
        self.data_dir = Path(data_dir)
        self.workbook = workbook

    def load(self, name: str) -> List[DataRow]:
        """
        Rows of ``<name>.csv`` in file order.

        Raises:
            DataSourceNotFoundError: the CSV file does not exist
        """
        return self.csv_data(name)

    def csv_data(self, name: str) -> List[DataRow]:
        path = self.data_dir / f"{name}.csv"
        if not path.is_file():
            raise DataSourceNotFoundError(
                f"Data source '{name}' not found: {path}",
                source=name,
                file_path=str(path),
            )

        with open(path, newline="", encoding="utf-8-sig") as f:
            rows = [tuple(row) for row in csv.reader(f)]

        logger.debug(f"Loaded {len(rows)} rows from {path}")
        return rows

    def excel_data(self, sheet_name: str, workbook: Optional[str] = None) -> List[DataRow]:
        """
        Rows of one sheet below its title row, every cell as a string.

        Raises:
            DataSourceNotFoundError: workbook or sheet does not exist
        """
        path = self.data_dir / (workbook or self.workbook)
        if not path.is_file():
            raise DataSourceNotFoundError(
                f"Workbook not found: {path}",
                source=sheet_name,
                file_path=str(path),
            )

        book = load_workbook(path, read_only=True, data_only=True)
        try:
            if sheet_name not in book.sheetnames:
                raise DataSourceNotFoundError(
                    f"Sheet '{sheet_name}' not found in {path}",
                    source=sheet_name,
                    file_path=str(path),
                )
            rows = [
                tuple("" if cell is None else str(cell) for cell in row)
                for row in book[sheet_name].iter_rows(min_row=2, values_only=True)
            ]
        finally:
            book.close()

        logger.debug(f"Loaded {len(rows)} rows from sheet {sheet_name} of {path}")
        return rows
