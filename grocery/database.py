from pymongo import MongoClient
from urllib.parse import quote_plus
from config import settings

class Database:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Database, cls).__new__(cls)
            cls._instance._initialize_connections()
        return cls._instance

    def _initialize_connections(self):
        # Atlas credentials take precedence over the plain URI when a host is configured
        if settings.DB1_HOST:
            self.db1_uri = f"mongodb+srv://{quote_plus(settings.DB1_USERNAME)}:{quote_plus(settings.DB1_PASSWORD)}@{settings.DB1_HOST}/?authSource={settings.DB1_AUTH_SOURCE}&ssl=true&retryWrites=false"
        else:
            self.db1_uri = settings.MONGODB_URI

        # MongoClient connects lazily; the timeout bounds how long a dead store blocks a request
        self.client1 = MongoClient(self.db1_uri, serverSelectionTimeoutMS=settings.MONGO_TIMEOUT_MS)

    def get_client1(self):
        return self.client1

    def close_connections(self):
        """Close all database connections"""
        self.client1.close()

# Create a singleton instance
db = Database()

# Export the clients for easy access
client1 = db.get_client1()


def get_database():
    """FastAPI dependency returning the catalog database."""
    return client1[settings.DB_NAME]
