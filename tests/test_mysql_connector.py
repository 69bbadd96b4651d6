import unittest
from unittest import mock

import pymysql

from classgen.connectors.mysql_connector import METADATA_COLUMNS, MysqlConnector
from classgen.models.settings_models import ConfigurationSettings


def make_settings():
    return ConfigurationSettings(
        generation_mode="prepared",
        db_host="127.0.0.1",
        db_user="root",
        db_password="x",
        db_name="forms",
        db_port=3306,
    )


class MysqlConnectorTests(unittest.TestCase):
    def setUp(self):
        patcher = mock.patch("classgen.connectors.mysql_connector.pymysql.connect")
        self.connect = patcher.start()
        self.addCleanup(patcher.stop)

        self.conn = self.connect.return_value
        self.cursor = mock.MagicMock()
        self.cursor.fetchall.return_value = []
        self.conn.cursor.return_value.__enter__.return_value = self.cursor
        self.connector = MysqlConnector(make_settings())

    def test_connects_with_settings(self):
        self.connector.ping()
        self.connect.assert_called_once_with(
            host="127.0.0.1",
            port=3306,
            user="root",
            password="x",
            database="forms",
        )

    def test_ping(self):
        self.connector.ping()
        self.cursor.execute.assert_called_once_with("SELECT 1", None)
        self.conn.close.assert_called_once_with()

    def test_ping_closes_connection_on_error(self):
        self.cursor.execute.side_effect = pymysql.err.OperationalError(2003, "unreachable")
        with self.assertRaises(pymysql.err.OperationalError):
            self.connector.ping()
        self.conn.close.assert_called_once_with()

    def test_list_tables_defaults_to_configured_database(self):
        self.cursor.fetchall.return_value = [("answers",), ("forms",)]
        self.assertEqual(self.connector.list_tables(), ["answers", "forms"])
        self.assertEqual(self.cursor.execute.call_args.args[1], ("forms",))

        self.connector.list_tables("archive")
        self.assertEqual(self.cursor.execute.call_args.args[1], ("archive",))

    def test_get_table_metadata(self):
        self.cursor.fetchall.return_value = [
            ("forms", "id", "int", None, 0),
            ("forms", "title", "varchar", 255, 1),
        ]
        df = self.connector.get_table_metadata("forms")

        self.assertEqual(list(df.columns), METADATA_COLUMNS)
        self.assertEqual(df["column_name"].tolist(), ["id", "title"])
        self.assertEqual(df["nullable"].tolist(), [False, True])
        self.assertEqual(self.cursor.execute.call_args.args[1], ("forms", "forms"))
        self.conn.close.assert_called_once_with()

    def test_get_table_metadata_unknown_table(self):
        df = self.connector.get_table_metadata("missing")
        self.assertTrue(df.empty)
        self.assertEqual(list(df.columns), METADATA_COLUMNS)


if __name__ == "__main__":
    unittest.main()
