"""
Tests for the connection manager.
"""

from unittest.mock import patch

from django.db import DatabaseError, OperationalError
from django.test import TestCase

from core.exceptions import ConstraintError, DatabaseConnectionError
from datastore.connection import ConnectionManager
from records.tests.factories import MemberFactory


class ConnectionManagerTest(TestCase):
    """Test statement execution and error translation."""

    def setUp(self):
        self.db = ConnectionManager()

    def test_query_returns_rows_as_dicts(self):
        MemberFactory(id='MEM_100', name='John Doe')

        rows = self.db.query("SELECT id, name FROM members WHERE id = %s", ['MEM_100'])

        self.assertEqual(rows, [{'id': 'MEM_100', 'name': 'John Doe'}])

    def test_execute_reports_rowcount(self):
        MemberFactory.create_batch(3)

        result = self.db.execute("UPDATE members SET occupation = %s", ['Teacher'])

        self.assertEqual(result.rowcount, 3)
        self.assertEqual(result.rows, [])

    def test_integrity_error_becomes_constraint_error(self):
        MemberFactory(id='MEM_100')

        with self.assertRaises(ConstraintError) as ctx:
            self.db.execute(
                "INSERT INTO members (id, member_number, name) VALUES (%s, %s, %s)",
                ['MEM_100', 'TM999', 'Duplicate'],
                table='members', operation='insert',
            )

        self.assertEqual(ctx.exception.table, 'members')
        self.assertEqual(ctx.exception.operation, 'insert')

    def test_other_database_errors_propagate_unchanged(self):
        with self.assertRaises(DatabaseError):
            self.db.execute("SELECT * FROM no_such_table")

    def test_test_connection_true_when_reachable(self):
        self.assertTrue(self.db.test_connection())

    def test_test_connection_never_raises(self):
        with patch.object(self.db.connection, 'ensure_connection',
                          side_effect=OperationalError('connection refused')):
            self.assertFalse(self.db.test_connection())

    def test_acquire_failure_raises_connection_error(self):
        with patch.object(self.db.connection, 'ensure_connection',
                          side_effect=OperationalError('connection refused')):
            with self.assertRaises(DatabaseConnectionError):
                self.db.acquire()

    def test_unpooled_connection_is_not_closed_after_statement(self):
        with patch.object(self.db.connection, 'close') as close:
            self.db.execute("SELECT 1")

        close.assert_not_called()

    def test_pooled_connection_is_released_after_failure(self):
        with patch.object(ConnectionManager, 'pooled', new=True), \
                patch.object(self.db, 'release') as release:
            with self.assertRaises(DatabaseError):
                self.db.execute("SELECT * FROM no_such_table")

        release.assert_called_once()

    def test_introspection(self):
        self.assertIn('members', self.db.table_names())
        self.assertIn('is_demo_data', self.db.columns('members'))
        self.assertEqual(self.db.primary_key('members'), 'id')

    def test_atomic_rolls_back_on_error(self):
        MemberFactory(id='MEM_100')

        with self.assertRaises(ConstraintError):
            with self.db.atomic():
                self.db.execute("DELETE FROM members")
                self.db.execute(
                    "INSERT INTO system_settings (id, setting_key) VALUES (%s, %s)",
                    [1, None],
                    table='system_settings',
                )

        self.assertEqual(len(self.db.query("SELECT id FROM members")), 1)

    def test_reset_sequences_runs_backend_statements_for_model_tables(self):
        with patch.object(self.db.connection.ops, 'sequence_reset_sql',
                          return_value=['SELECT 1']) as reset_sql:
            ran = self.db.reset_sequences(['system_settings', 'no_such_table'])

        self.assertEqual(ran, 1)
        models = reset_sql.call_args[0][1]
        self.assertEqual([model._meta.db_table for model in models], ['system_settings'])

    def test_reset_sequences_ignores_unknown_tables(self):
        with patch.object(self.db.connection.ops, 'sequence_reset_sql') as reset_sql:
            self.assertEqual(self.db.reset_sequences(['no_such_table']), 0)

        reset_sql.assert_not_called()
