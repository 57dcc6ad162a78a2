# tests/test_database.py
import unittest

from mentormatch.database import is_memory_sqlite

class TestSqliteUrls(unittest.TestCase):

    def test_memory_urls_share_one_connection(self):
        for url in ("sqlite://", "sqlite:///:memory:", "sqlite:///file::memory:?cache=shared&uri=true"):
            self.assertTrue(is_memory_sqlite(url), url)

    def test_file_urls_use_a_real_pool(self):
        for url in ("sqlite:///./mentormatch.db", "sqlite:////var/lib/mentormatch/app.db"):
            self.assertFalse(is_memory_sqlite(url), url)

if __name__ == "__main__":
    unittest.main()
