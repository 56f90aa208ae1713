"""
Unit tests for task list query parsing.
"""
from django.test import SimpleTestCase

from apps.tasks.exceptions import TaskValidationError
from apps.tasks.query import MAX_PAGE_VALUE, SortField, TaskQuery, parse_sort, parse_task_query


class ParseTaskQueryTest(SimpleTestCase):
    """Test query-string parsing into TaskQuery."""

    def test_defaults(self):
        query = parse_task_query()
        self.assertEqual(query, TaskQuery())
        self.assertIsNone(query.completed)
        self.assertEqual(query.skip, 0)
        self.assertIsNone(query.limit)
        self.assertEqual(query.filters(), {})

    def test_completed_true_and_false(self):
        self.assertIs(parse_task_query(completed="true").completed, True)
        self.assertIs(parse_task_query(completed="FALSE").completed, False)
        self.assertEqual(parse_task_query(completed="true").filters(), {"completed": True})

    def test_completed_invalid(self):
        with self.assertRaises(TaskValidationError) as ctx:
            parse_task_query(completed="maybe")
        self.assertIn("completed", ctx.exception.errors)

    def test_pagination(self):
        query = parse_task_query(limit="2", skip="3")
        self.assertEqual(query.limit, 2)
        self.assertEqual(query.skip, 3)

    def test_limit_zero_is_unbounded(self):
        self.assertIsNone(parse_task_query(limit="0").limit)

    def test_negative_or_garbage_pagination_rejected(self):
        for kwargs in ({"limit": "-1"}, {"skip": "-5"}, {"limit": "ten"}, {"skip": "1.5"}):
            with self.subTest(**kwargs):
                with self.assertRaises(TaskValidationError):
                    parse_task_query(**kwargs)

    def test_oversized_pagination_rejected(self):
        query = parse_task_query(limit=str(MAX_PAGE_VALUE), skip=str(MAX_PAGE_VALUE))
        self.assertEqual((query.limit, query.skip), (MAX_PAGE_VALUE, MAX_PAGE_VALUE))

        for name in ("limit", "skip"):
            with self.subTest(name=name):
                with self.assertRaises(TaskValidationError) as ctx:
                    parse_task_query(**{name: "99999999999999999999"})
                self.assertIn(name, ctx.exception.errors)


class ParseSortTest(SimpleTestCase):
    """Test sortBy parsing."""

    def test_single_pair(self):
        self.assertEqual(parse_sort("description:asc"), (SortField("description"),))
        self.assertEqual(
            parse_sort("createdAt:desc"), (SortField("created_at", descending=True),)
        )

    def test_direction_defaults_to_ascending(self):
        self.assertEqual(parse_sort("updatedAt"), (SortField("updated_at"),))
        self.assertEqual(parse_sort("completed:sideways"), (SortField("completed"),))
        self.assertEqual(parse_sort("completed:DESC"), (SortField("completed", descending=True),))

    def test_unknown_fields_are_ignored(self):
        self.assertEqual(parse_sort("owner:asc"), ())
        self.assertEqual(
            parse_sort("owner:asc,description:desc"),
            (SortField("description", descending=True),),
        )

    def test_multiple_pairs_keep_order_and_drop_duplicates(self):
        self.assertEqual(
            parse_sort("completed:desc,description:asc,completed:asc"),
            (SortField("completed", descending=True), SortField("description")),
        )

    def test_order_by_appends_tiebreakers(self):
        query = TaskQuery(sort=(SortField("description", descending=True),))
        self.assertEqual(query.order_by(), ("-description", "created_at", "id"))

    def test_order_by_does_not_repeat_sorted_field(self):
        query = TaskQuery(sort=(SortField("created_at", descending=True),))
        self.assertEqual(query.order_by(), ("-created_at", "id"))

    def test_default_order_is_creation_order(self):
        self.assertEqual(TaskQuery().order_by(), ("created_at", "id"))
