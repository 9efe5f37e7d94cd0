"""Tests for root and health endpoints."""

import unittest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from api.main import app, SERVICE_NAME, VERSION


class TestHealth(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)
        self._saved = getattr(app.state, 'mongo_client', None)

    def tearDown(self):
        app.state.mongo_client = self._saved

    def test_root(self):
        response = self.client.get('/')

        assert response.status_code == 200
        assert response.json() == {'service': SERVICE_NAME, 'version': VERSION, 'status': 'running'}

    def test_health_with_mongodb(self):
        app.state.mongo_client = MagicMock()

        response = self.client.get('/health')

        assert response.status_code == 200
        data = response.json()
        assert data['status'] == 'healthy'
        assert data['services']['mongodb']['status'] == 'healthy'

    def test_health_without_mongodb(self):
        app.state.mongo_client = None

        response = self.client.get('/health')

        assert response.status_code == 503
        assert response.json()['status'] == 'degraded'

    def test_health_when_ping_fails(self):
        client = MagicMock()
        client.admin.command.side_effect = ServerSelectionTimeoutError("timed out")
        app.state.mongo_client = client

        response = self.client.get('/health')

        assert response.status_code == 503
        assert response.json()['services']['mongodb']['status'] == 'unhealthy'

    def test_routes_without_database_return_503(self):
        app.state.mongo_client = None

        response = self.client.post('/auth/login', json={'email': 'a@x.com', 'password': 'whatever1'})

        assert response.status_code == 503


if __name__ == '__main__':
    unittest.main()
