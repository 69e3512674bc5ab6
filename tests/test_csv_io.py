import csv
import os
import tempfile
import unittest
from liars_table.persistence import csv_io


class TestCsvIO(unittest.TestCase):
    def test_header_written_once(self):
        header = csv_io.get_event_header()
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'events.csv')
            csv_io.append_row_to_csv({"game_id": "g", "event_type": "BidPlaced"}, path, header)
            csv_io.append_rows_to_csv([{"game_id": "g", "event_type": "LiarCalled"},
                                       {"game_id": "g", "event_type": "DieLost"}], path, header)
            with open(path, newline='', encoding='utf-8') as f:
                rows = list(csv.DictReader(f))
        self.assertEqual([r["event_type"] for r in rows], ["BidPlaced", "LiarCalled", "DieLost"])

    def test_headers_are_copies(self):
        csv_io.get_summary_header().append("extra")
        self.assertNotIn("extra", csv_io.get_summary_header())


if __name__ == '__main__':
    unittest.main()
