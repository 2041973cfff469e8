"""
Tests for the handover side of the API: communications, staff notices,
night rounds and the daily journals.
"""
from datetime import date, timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APITestCase

from care import constants as c
from care.models import (
    AuditEvent, Communication, JournalCheckbox, JournalEntry, Resident, RoundRecord, StaffNotice,
    StaffNoticeReadStatus, User,
)

DAY = date(2025, 3, 10)


class HandoverAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(username='admin1', password='P@ssw0rd1', role='admin',
                                              first_name='管理 一郎')
        self.nurse = User.objects.create_user(username='nurse1', password='P@ssw0rd1', role='nurse',
                                              first_name='看護 花子')
        self.resident = Resident.objects.create(name='山田 一郎', room_number='101', floor='1')
        self.client.force_authenticate(self.nurse)

    def _notice(self, **kw):
        today = timezone.localdate()
        fields = {'content': '感染対策の徹底', 'start_date': today - timedelta(days=1),
                  'end_date': today + timedelta(days=1)}
        fields.update(kw)
        return StaffNotice.objects.create(**fields)

    # -----------------------------------------------------------------
    # communications
    # -----------------------------------------------------------------
    def test_communication_create_list_and_mark_read(self):
        r = self.client.post(reverse('communications'), {
            'residentId': str(self.resident.id), 'recordDate': '2025-03-10T08:30:00+09:00',
            'category': 'handover', 'subject': '<i>申し送り</i>', 'message': '夜間不穏あり',
        }, format='json')
        self.assertEqual(r.status_code, 201)
        self.assertEqual(r.data['staffId'], str(self.nurse.id))
        self.assertEqual(r.data['priority'], 'normal')
        self.assertEqual(r.data['subject'], '申し送り')
        self.assertFalse(r.data['isRead'])

        Communication.objects.create(staff_id='x', record_date=timezone.now() - timedelta(days=400),
                                     category='general', subject='古い', message='-')
        listing = self.client.get(reverse('communications'), {'startDate': '2025-03-10', 'endDate': '2025-03-10'})
        self.assertEqual([m['subject'] for m in listing.data], ['申し送り'])
        self.assertEqual(len(self.client.get(reverse('communications')).data), 2)

        url = reverse('communication_mark_read', args=[r.data['id']])
        self.assertTrue(self.client.patch(url).data['isRead'])
        self.assertTrue(Communication.objects.get(id=r.data['id']).is_read)
        self.assertTrue(AuditEvent.objects.filter(action='communication.read').exists())

    def test_communication_rejects_unknown_priority(self):
        r = self.client.post(reverse('communications'), {
            'recordDate': '2025-03-10T08:30:00+09:00', 'category': 'incident', 'priority': 'asap',
            'subject': '転倒', 'message': '居室で転倒',
        }, format='json')
        self.assertEqual(r.status_code, 400)
        self.assertIn('priority', r.data['error']['message'])

    # -----------------------------------------------------------------
    # staff notices
    # -----------------------------------------------------------------
    def test_only_admins_post_and_withdraw_notices(self):
        body = {'content': '避難訓練', 'startDate': '2025-03-01', 'endDate': '2025-03-31', 'targetFloor': '1階'}
        self.assertEqual(self.client.post(reverse('staff_notices'), body, format='json').status_code, 403)

        self.client.force_authenticate(self.admin)
        r = self.client.post(reverse('staff_notices'), body, format='json')
        self.assertEqual(r.status_code, 201)
        self.assertEqual(r.data['createdBy'], str(self.admin.id))
        self.assertEqual(r.data['targetJobRole'], '全体')

        url = reverse('staff_notice_detail', args=[r.data['id']])
        self.assertEqual(self.client.delete(url).status_code, 200)
        self.assertFalse(StaffNotice.objects.get(id=r.data['id']).is_active)
        self.assertEqual(self.client.get(reverse('staff_notices')).data, [])
        self.assertEqual(self.client.get(url).status_code, 404)

    def test_notice_period_must_not_end_before_it_starts(self):
        self.client.force_authenticate(self.admin)
        r = self.client.post(reverse('staff_notices'), {
            'content': 'x', 'startDate': '2025-03-10', 'endDate': '2025-03-09',
        }, format='json')
        self.assertEqual(r.status_code, 400)
        self.assertIn('endDate', r.data['error']['message'])

    def test_read_receipts_and_unread_count(self):
        notice = self._notice()
        self._notice(content='期限切れ', start_date=DAY - timedelta(days=30), end_date=DAY - timedelta(days=20))
        self._notice(content='取り下げ', is_active=False)

        count_url = reverse('staff_notices_unread_count')
        self.assertEqual(self.client.get(count_url).data, {'count': 1})

        r = self.client.post(reverse('staff_notice_mark_read', args=[notice.id]))
        self.assertEqual(r.status_code, 201)
        self.assertEqual(r.data['staffName'], '看護 花子')
        self.assertEqual(self.client.post(reverse('staff_notice_mark_read', args=[notice.id])).status_code, 200)
        self.assertEqual(StaffNoticeReadStatus.objects.count(), 1)
        self.assertEqual(self.client.get(count_url).data, {'count': 0})

        listing = self.client.get(reverse('staff_notices')).data
        flags = {n['content']: n['isRead'] for n in listing}
        self.assertEqual(flags, {'感染対策の徹底': True, '期限切れ': False})

        receipts = self.client.get(reverse('staff_notice_read_status', args=[notice.id])).data
        self.assertEqual([(x['staffId'], x['staffName']) for x in receipts], [(self.nurse.id, '看護 花子')])

        self.client.force_authenticate(self.admin)
        self.assertEqual(self.client.get(count_url).data, {'count': 1})

        self.client.force_authenticate(self.nurse)
        self.assertEqual(self.client.post(reverse('staff_notice_mark_unread', args=[notice.id])).status_code, 200)
        self.assertEqual(self.client.get(count_url).data, {'count': 1})

    # -----------------------------------------------------------------
    # night rounds
    # -----------------------------------------------------------------
    def test_round_records_are_listed_by_hour_and_deletable(self):
        for hour, kind, extra in ((3, 'position_change', {'positionValue': '右'}), (1, 'patrol', {})):
            r = self.client.post(reverse('round_records'), {
                'residentId': str(self.resident.id), 'recordDate': '2025-03-10', 'hour': hour,
                'recordType': kind, 'staffName': '看護 花子', **extra,
            }, format='json')
            self.assertEqual(r.status_code, 201)
            self.assertEqual(r.data['createdBy'], str(self.nurse.id))
        RoundRecord.objects.create(resident=self.resident, record_date=DAY + timedelta(days=1), hour=0,
                                   record_type='patrol', staff_name='x')

        listing = self.client.get(reverse('round_records'), {'recordDate': '2025-03-10'}).data
        self.assertEqual([(x['hour'], x['recordType']) for x in listing], [(1, 'patrol'), (3, 'position_change')])

        url = reverse('round_record_detail', args=[listing[0]['id']])
        self.assertEqual(self.client.delete(url).status_code, 200)
        self.assertEqual(RoundRecord.objects.filter(record_date=DAY).count(), 1)

    def test_round_record_rejects_hour_24(self):
        r = self.client.post(reverse('round_records'), {
            'residentId': str(self.resident.id), 'recordDate': '2025-03-10', 'hour': 24,
            'recordType': 'patrol', 'staffName': 'x',
        }, format='json')
        self.assertEqual(r.status_code, 400)

    # -----------------------------------------------------------------
    # journals
    # -----------------------------------------------------------------
    def test_journal_entry_post_overwrites_same_day_type_and_floor(self):
        body = {'recordDate': '2025-03-10', 'recordType': c.NIGHT, 'floor': '1階',
                'enteredBy': '', 'residentCount': 20, 'hospitalizedCount': 1}
        r = self.client.post(reverse('journal_entries'), body, format='json')
        self.assertEqual(r.status_code, 201)
        self.assertIsNone(r.data['enteredBy'])

        body.update(enteredBy='看護 花子', hospitalizedCount=2)
        r = self.client.post(reverse('journal_entries'), body, format='json')
        self.assertEqual(r.status_code, 200)
        entry = JournalEntry.objects.get()
        self.assertEqual((entry.entered_by, entry.hospitalized_count), ('看護 花子', 2))

    def test_journal_entries_filter_and_order(self):
        for day, kind in ((DAY, c.JOURNAL_NURSING), (DAY, c.DAYTIME), (DAY - timedelta(days=1), c.NIGHT),
                          (DAY - timedelta(days=40), c.DAYTIME)):
            JournalEntry.objects.create(record_date=day, record_type=kind, floor='1階')

        r = self.client.get(reverse('journal_entries'), {'dateFrom': '2025-03-01', 'dateTo': '2025-03-10'})
        self.assertEqual([(x['recordDate'], x['recordType']) for x in r.data], [
            ('2025-03-10', c.DAYTIME), ('2025-03-10', c.JOURNAL_NURSING), ('2025-03-09', c.NIGHT),
        ])

        r = self.client.get(reverse('journal_entries'), {'recordType': c.DAYTIME})
        self.assertEqual(len(r.data), 2)
        self.assertEqual(self.client.get(reverse('journal_entries'), {'recordType': '早番'}).status_code, 400)

    def test_journal_checkbox_is_one_row_per_entry_and_journal(self):
        body = {'recordDate': '2025-03-10', 'recordId': f'excretion-{self.resident.id}',
                'recordType': c.EXCRETION, 'checkboxType': c.DAYTIME, 'isChecked': True}
        self.assertEqual(self.client.post(reverse('journal_checkboxes'), body, format='json').status_code, 201)
        body['isChecked'] = False
        self.assertEqual(self.client.post(reverse('journal_checkboxes'), body, format='json').status_code, 200)
        body.update(checkboxType=c.JOURNAL_NURSING, isChecked=True)
        self.client.post(reverse('journal_checkboxes'), body, format='json')

        self.assertEqual(JournalCheckbox.objects.count(), 2)
        r = self.client.get(reverse('journal_checkboxes_for_day', args=['2025-03-10']))
        self.assertEqual([(x['checkboxType'], x['isChecked']) for x in r.data],
                         [(c.DAYTIME, False), (c.JOURNAL_NURSING, True)])
        self.assertEqual(self.client.get(reverse('journal_checkboxes_for_day', args=['2025-03-11'])).data, [])
        self.assertEqual(self.client.get(reverse('journal_checkboxes_for_day', args=['03-10'])).status_code, 400)
