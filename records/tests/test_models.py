"""
Tests for church record models.
"""

from django.test import TestCase

from datastore.gateway import TableGateway
from records.models import Event, Member
from records.tests.factories import ChurchUserFactory, EventFactory, MemberFactory


class DemoFlagDefaultsTest(TestCase):
    """Rows written outside the ORM still get the database defaults."""

    def test_raw_insert_defaults_to_production(self):
        TableGateway().db.execute(
            "INSERT INTO members (id, member_number, name) VALUES (%s, %s, %s)",
            ['MEM_RAW', 'TM500', 'Raw Insert'],
        )

        member = Member.objects.get(pk='MEM_RAW')
        self.assertIs(member.is_demo_data, False)
        self.assertEqual(member.membership_status, 'Active')
        self.assertIsNotNone(member.created_at)

    def test_unflagged_rows_allowed(self):
        EventFactory(id='EVT_001', is_demo_data=None)

        self.assertIsNone(Event.objects.get(pk='EVT_001').is_demo_data)


class StrTest(TestCase):

    def test_member_str(self):
        member = MemberFactory(member_number='TM001', name='John Doe')

        self.assertEqual(str(member), 'TM001 John Doe')

    def test_church_user_str(self):
        user = ChurchUserFactory(name='System Administrator', role='Admin')

        self.assertEqual(str(user), 'System Administrator (Admin)')
