"""Tests for MongoDB client creation."""

import unittest
from unittest.mock import patch

from pymongo.errors import ServerSelectionTimeoutError

from adapter.mongodb.connection import create_mongodb_client, ping
from utils.config import Settings


class TestCreateMongodbClient(unittest.TestCase):

    @patch('adapter.mongodb.connection.MongoClient')
    def test_client_reads_timezone_aware_datetimes(self, mock_client_cls):
        client = create_mongodb_client(Settings(mongo_url='mongodb://localhost:27017'))

        self.assertIs(client, mock_client_cls.return_value)
        args, kwargs = mock_client_cls.call_args
        self.assertEqual(args[0], 'mongodb://localhost:27017')
        self.assertTrue(kwargs['tz_aware'])
        client.admin.command.assert_called_once_with('ping')

    @patch('adapter.mongodb.connection.MongoClient')
    def test_missing_url_returns_none(self, mock_client_cls):
        self.assertIsNone(create_mongodb_client(Settings()))
        mock_client_cls.assert_not_called()

    @patch('adapter.mongodb.connection.MongoClient')
    def test_unreachable_server_returns_none(self, mock_client_cls):
        mock_client_cls.return_value.admin.command.side_effect = ServerSelectionTimeoutError("timed out")

        self.assertIsNone(create_mongodb_client(Settings(mongo_url='mongodb://nowhere:27017')))

    def test_ping_without_client(self):
        self.assertFalse(ping(None))


if __name__ == '__main__':
    unittest.main()
