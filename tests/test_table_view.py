import unittest

from crypto_screener.schemas.screener import SortState
from crypto_screener.schemas.ticker import FieldKey
from crypto_screener.services.normalizer import normalize
from crypto_screener.services.screener_state import ScreenerSession
from crypto_screener.services.table_view import build_snapshot, format_cell


class TestFormatCell(unittest.TestCase):
    def test_price_and_volume_use_fixed_decimals(self):
        record = normalize({"price_usd": "1234.56789", "volume24": 12345.6789})

        self.assertEqual(format_cell(record, FieldKey.PRICE), "1234.567890")
        self.assertEqual(format_cell(record, FieldKey.VOLUME_24H), "12345.68")

    def test_unparseable_price_is_shown_raw(self):
        record = normalize({"price_usd": "n/a"})
        self.assertEqual(format_cell(record, FieldKey.PRICE), "n/a")

    def test_missing_values_render_empty(self):
        record = normalize({})
        for field in FieldKey:
            self.assertEqual(format_cell(record, field), "")

    def test_percent_change_is_shown_as_received(self):
        record = normalize({"percent_change_24h": "-1.50", "percent_change_1h": 0.25})

        self.assertEqual(format_cell(record, FieldKey.PERCENT_CHANGE_24H), "-1.50")
        self.assertEqual(format_cell(record, FieldKey.PERCENT_CHANGE_1H), "0.25")

    def test_name_is_truncated(self):
        record = normalize({"name": "A" * 40})

        self.assertEqual(format_cell(record, FieldKey.NAME), "A" * 30)
        self.assertEqual(format_cell(record, FieldKey.NAME, name_width=5), "AAAAA")


class TestBuildSnapshot(unittest.TestCase):
    def test_snapshot_carries_columns_rows_and_selection(self):
        session = ScreenerSession(SortState(active_field=FieldKey.PRICE, ascending=False))
        session.apply_fetch_result(
            [
                {"id": "1", "symbol": "BTC", "name": "Bitcoin", "price_usd": "45000"},
                {"id": "2", "symbol": "ETH", "name": "Ethereum", "price_usd": "3000"},
            ]
        )
        session.toggle_cell("2", "symbol")

        snapshot = build_snapshot(session)

        self.assertEqual(
            [c.label for c in snapshot.columns],
            ["Symbol", "Name", "Price (USD)", "1h %", "24h %", "7d %", "Volume ($)"],
        )
        self.assertEqual(snapshot.columns[2].sort_order, "descending")
        self.assertEqual(snapshot.columns[0].sort_order, "none")
        self.assertEqual([r.row_id for r in snapshot.rows], ["1", "2"])
        self.assertEqual(snapshot.rows[0].cells["price"], "45000.000000")
        self.assertEqual(snapshot.rows[1].selected, ["symbol"])
        self.assertEqual(snapshot.rows[0].selected, [])
        self.assertIsNone(snapshot.error)

    def test_snapshot_reports_error_state(self):
        session = ScreenerSession()
        session.refresh(_FailingFeed())

        snapshot = build_snapshot(session)

        self.assertTrue(snapshot.loaded)
        self.assertEqual(snapshot.rows, [])
        self.assertIn("timed out", snapshot.error)


class _FailingFeed:
    def get_tickers(self):
        raise ValueError("timed out")


if __name__ == "__main__":
    unittest.main()
