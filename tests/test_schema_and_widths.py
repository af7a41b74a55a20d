import unittest

import pandas as pd

from alfa_reader.core.conventions import (NamingConventions, configure_from_config,
                                          conventions_from_config, current_conventions,
                                          is_fault_topic_name, load_config)
from alfa_reader.core.message import decode, format_datetime, format_stamp, parse_value, render
from alfa_reader.core.schema import ColumnRole, infer_schema
from alfa_reader.core.tokenize import tokenize
from alfa_reader.core.widths import ColumnWidths, RowWidths, combine, with_label_floors

CONV = NamingConventions(field_prefix="field_", fault_topic_prefix="fault_")


class ConventionTests(unittest.TestCase):
    def tearDown(self):
        configure_from_config({})

    def test_fault_topic_prefix_must_lead_the_name(self):
        self.assertTrue(is_fault_topic_name("fault_motor1", CONV))
        self.assertFalse(is_fault_topic_name("motor1", CONV))
        self.assertFalse(is_fault_topic_name("faul_1", CONV))
        self.assertFalse(is_fault_topic_name("Fault_motor1", CONV))
        self.assertFalse(is_fault_topic_name("fault", CONV))

    def test_default_fault_prefix(self):
        self.assertTrue(is_fault_topic_name("failure_status-engines", NamingConventions()))
        self.assertFalse(is_fault_topic_name("mavros-imu-data", NamingConventions()))

    def test_packaged_config_matches_defaults(self):
        cfg = load_config()
        self.assertEqual(NamingConventions(), conventions_from_config(cfg))

    def test_configure_overrides_and_resets(self):
        configure_from_config({"conventions": {"field_prefix": "f_", "bogus": 1}})
        self.assertEqual("f_", current_conventions().field_prefix)
        self.assertEqual("%time", current_conventions().time_marker)
        configure_from_config({})
        self.assertEqual("field.", current_conventions().field_prefix)

    def test_empty_delimiter_keeps_default(self):
        for value in (None, ""):
            with self.assertLogs("alfa_reader", level="WARNING"):
                conv = conventions_from_config({"conventions": {"delimiter": value}})
            self.assertEqual(",", conv.delimiter)
        self.assertEqual(";", conventions_from_config({"conventions": {"delimiter": ";"}}).delimiter)


class TokenizeTests(unittest.TestCase):
    def test_line_terminator_dropped(self):
        self.assertEqual(["1", "a", ""], tokenize("1,a,\r\n"))

    def test_empty_line_has_no_fields(self):
        self.assertEqual([], tokenize("\n"))


class HeaderInferenceTests(unittest.TestCase):
    RAW = ["%time", "field.header.seq", "field.header.stamp", "field.header.frame_id",
           "field.linear_acceleration.x", "other"]

    def test_roles_and_labels(self):
        schema = infer_schema(self.RAW, NamingConventions())
        roles = [c.role for c in schema.columns]
        self.assertEqual([ColumnRole.TIME, ColumnRole.HEADER_SEQ, ColumnRole.HEADER_STAMP,
                          ColumnRole.HEADER_FRAME_ID, ColumnRole.FIELD, ColumnRole.FIELD], roles)
        self.assertEqual(("linear_acceleration.x", "other"), schema.field_labels)
        self.assertTrue(schema.has_header)

    def test_without_header_columns(self):
        schema = infer_schema(["%time", "field_a", "field_b"], CONV)
        self.assertEqual(("a", "b"), schema.field_labels)
        self.assertFalse(schema.has_header)

    def test_inference_is_idempotent(self):
        first = infer_schema(self.RAW, NamingConventions())
        second = infer_schema(self.RAW, NamingConventions())
        self.assertEqual(first, second)
        self.assertEqual(first, infer_schema(first.raw_labels, NamingConventions()))


class DecodeTests(unittest.TestCase):
    def test_value_typing(self):
        self.assertEqual("", parse_value(""))
        self.assertIs(True, parse_value("True"))
        self.assertEqual(42, parse_value("42"))
        self.assertEqual(1.5, parse_value("1.5"))
        self.assertEqual("base_link", parse_value("base_link"))

    def test_time_rendering(self):
        self.assertEqual("1970/01/01 00:00:00.000001000", format_datetime(pd.Timestamp(1000, unit="ns")))
        self.assertEqual("3.000000007", format_stamp(pd.Timestamp(3_000_000_007, unit="ns")))
        self.assertEqual("", format_datetime(None))

    def test_decode_with_header_subrecord(self):
        schema = infer_schema(["%time", "field.header.seq", "field.header.stamp",
                               "field.header.frame_id", "field.x"], NamingConventions())
        record, widths = decode(["1000", "7", "2000000001", "base_link", "0.25"], schema)
        self.assertEqual(pd.Timestamp(1000, unit="ns"), record.datetime)
        self.assertEqual(7, record.header.seq)
        self.assertEqual("base_link", record.header.frame_id)
        self.assertEqual((0.25,), record.fields)
        self.assertEqual(RowWidths(seq_id=1, timestamp=11, frame_id=9, fields=(4,)), widths)

    def test_decode_without_header_subrecord(self):
        schema = infer_schema(["%time", "field_a", "field_b"], CONV)
        record, widths = decode(["2000", "2", ""], schema)
        self.assertIsNone(record.header)
        self.assertEqual((2, ""), record.fields)
        self.assertEqual(RowWidths(fields=(1, 0)), widths)

    def test_decode_rejects_unpadded_tokens(self):
        schema = infer_schema(["%time", "field_a"], CONV)
        with self.assertRaises(ValueError):
            decode(["1"], schema)

    def test_render_pads_to_widths(self):
        schema = infer_schema(["%time", "field_a", "field_b"], CONV)
        record, _ = decode(["0", "1", "x"], schema)
        widths = ColumnWidths(fields=(3, 2))
        self.assertEqual("1970/01/01 00:00:00.000000000 |   1 |  x", render(record, widths, False))


class WidthTests(unittest.TestCase):
    ROWS = [RowWidths(1, 4, 2, (3, 1)), RowWidths(5, 2, 2, (1, 6)), RowWidths(2, 9, 1, (2, 2))]

    def _fold(self, rows):
        acc = ColumnWidths.for_fields(2)
        for r in rows:
            acc = combine(acc, r)
        return acc

    def test_fold_takes_running_maximum(self):
        self.assertEqual(ColumnWidths(5, 9, 2, (3, 6)), self._fold(self.ROWS))

    def test_fold_is_order_independent_and_monotone(self):
        forward = self._fold(self.ROWS)
        backward = self._fold(list(reversed(self.ROWS)))
        self.assertEqual(forward, backward)
        for r in self.ROWS:
            self.assertTrue(all(f >= w for f, w in zip(forward.fields, r.fields)))

    def test_combine_appends_columns_not_seen_before(self):
        acc = combine(ColumnWidths(), RowWidths(fields=(4, 2)))
        self.assertEqual((4, 2), acc.fields)

    def test_label_floors(self):
        floored = with_label_floors(ColumnWidths(fields=(2,)), ["long_label", "b"])
        self.assertEqual(len("SeqID"), floored.seq_id)
        self.assertEqual(len("Time Stamp"), floored.timestamp)
        self.assertEqual(len("Frame"), floored.frame_id)
        # second column never reported a width: it falls back to its label
        self.assertEqual((10, 1), floored.fields)


if __name__ == "__main__":
    unittest.main()
