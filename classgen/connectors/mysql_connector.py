from typing import Any, Dict, Optional, Sequence

import pandas as pd
import pymysql

from ..models.settings_models import ConfigurationSettings

METADATA_COLUMNS = ["table_name", "column_name", "data_type", "length", "nullable"]

_TABLES_QUERY = """
    SELECT TABLE_NAME FROM information_schema.TABLES
    WHERE TABLE_SCHEMA = %s AND TABLE_TYPE = 'BASE TABLE'
    ORDER BY TABLE_NAME
"""

_COLUMNS_QUERY = """
    SELECT TABLE_NAME AS table_name, COLUMN_NAME AS column_name,
           DATA_TYPE AS data_type, CHARACTER_MAXIMUM_LENGTH AS length,
           IS_NULLABLE = 'YES' AS nullable
    FROM information_schema.COLUMNS
    WHERE TABLE_SCHEMA = %s AND TABLE_NAME = %s
    ORDER BY ORDINAL_POSITION
"""


class MysqlConnector:
    """
    Reads the table definitions the class generator works from.
    Every call opens its own connection and closes it before returning.
    """

    def __init__(self, settings: ConfigurationSettings) -> None:
        self._settings = settings

    def connection_kwargs(self) -> Dict[str, Any]:
        return {
            "host": self._settings.db_host,
            "port": self._settings.db_port,
            "user": self._settings.db_user,
            "password": self._settings.db_password.get_secret_value(),
            "database": self._settings.db_name,
        }

    def _query(self, query: str, params: Sequence[Any] = ()) -> list[tuple]:
        conn = pymysql.connect(**self.connection_kwargs())
        try:
            with conn.cursor() as cur:
                cur.execute(query, params or None)
                return list(cur.fetchall())
        finally:
            conn.close()

    def ping(self) -> None:
        """Round-trip `SELECT 1`; driver errors propagate."""
        self._query("SELECT 1")

    def list_tables(self, schema: Optional[str] = None) -> list[str]:
        rows = self._query(_TABLES_QUERY, (schema or self._settings.db_name,))
        return [str(r[0]) for r in rows]

    def get_table_metadata(self, table_name: str) -> pd.DataFrame:
        """Columns of `table_name` in ordinal order, one row per column."""
        rows = self._query(_COLUMNS_QUERY, (self._settings.db_name, table_name))
        df = pd.DataFrame(rows, columns=METADATA_COLUMNS)
        df["nullable"] = df["nullable"].astype(bool)
        return df
