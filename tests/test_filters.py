"""Unit tests for the filter panel."""

import unittest

from related_list.schema.cache import SchemaCache
from related_list.schemas.filters import FilterCondition
from related_list.schemas.object_schema import FieldDescriptor, ObjectSchema
from related_list.services.filters import FILTER_OPERATORS, LOGIC_OPERATORS, FilterPanel, filter_field_options


class FilterPanelTests(unittest.TestCase):
    def test_starts_with_one_blank_row(self) -> None:
        panel = FilterPanel()
        conditions = panel.conditions()

        self.assertEqual(len(conditions), 1)
        self.assertTrue(panel.is_first_filter)
        self.assertEqual(conditions[0].field, "")
        self.assertEqual(conditions[0].operator, "=")
        self.assertEqual(conditions[0].logic_operator, "AND")

    def test_add_update_remove(self) -> None:
        panel = FilterPanel()
        first = panel.conditions()[0]
        second = panel.add_filter()
        self.assertFalse(panel.is_first_filter)
        self.assertNotEqual(first.id, second.id)

        updated = panel.update_filter(second.id, field="Title", operator="LIKE", value="eng", logic_operator="OR")
        self.assertIsNotNone(updated)
        self.assertEqual(panel.conditions()[1].field, "Title")
        self.assertEqual(panel.conditions()[1].logic_operator, "OR")
        self.assertIsNone(panel.update_filter("missing", field="Title"))

        self.assertTrue(panel.remove_filter(first.id))
        self.assertFalse(panel.remove_filter(first.id))
        self.assertEqual([condition.id for condition in panel.conditions()], [second.id])

    def test_replace_assigns_missing_ids(self) -> None:
        panel = FilterPanel()
        panel.replace(
            [
                FilterCondition(id="filter-kept", field="Title", operator="LIKE", value="eng"),
                FilterCondition(field="Email", operator="ENDS", value=".org", logic_operator="OR"),
            ]
        )
        conditions = panel.conditions()

        self.assertEqual(conditions[0].id, "filter-kept")
        self.assertTrue(conditions[1].id.startswith("filter-"))
        self.assertEqual(conditions[1].logic_operator, "OR")
        self.assertFalse(panel.is_first_filter)

    def test_field_options_skip_unknown_and_address_fields(self) -> None:
        schema = SchemaCache(
            ObjectSchema(
                api_name="Contact",
                fields={
                    "Title": FieldDescriptor(api_name="Title", label="Job Title"),
                    "Email": FieldDescriptor(api_name="Email", label=""),
                    "MailingAddress": FieldDescriptor(api_name="MailingAddress", data_type="Address"),
                },
            )
        )

        options = filter_field_options(schema, ["Title", "Email", "MailingAddress", "Account.Name"])

        self.assertEqual([(option.label, option.value) for option in options], [("Job Title", "Title"), ("Email", "Email")])

    def test_operator_catalogue(self) -> None:
        self.assertEqual(
            [option.value for option in FILTER_OPERATORS],
            ["=", "!=", "<", ">", "LIKE", "does not contain", "STARTS", "ENDS"],
        )
        self.assertEqual([option.value for option in LOGIC_OPERATORS], ["AND", "OR"])


if __name__ == "__main__":
    unittest.main()
