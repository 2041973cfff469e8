"""
Integration tests for the care facility API.

These exercise authentication, the daily timeline and medication
endpoints, and the record CRUD plumbing through DRF's APIClient.
"""
from datetime import date, datetime, time, timedelta
from unittest import mock

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient, APITestCase

from care import constants as c
from care.authentication import issue_token
from care.models import (
    AuditEvent, CareRecord, CleaningLinenRecord, FacilitySettings, MedicationRecord, Resident, Staff, User,
)

DAY = date(2025, 3, 10)


def at(h, m=0):
    return datetime.combine(DAY, time(h, m), tzinfo=c.JST)


class CareAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(username='admin1', password='P@ssw0rd1', role='admin')
        self.nurse = User.objects.create_user(username='nurse1', password='P@ssw0rd1', role='nurse',
                                              first_name='看護 花子')
        self.carer = Staff.objects.create(staff_id='s001', staff_name='介護 太郎', floor='1')
        self.resident = Resident.objects.create(
            name='山田 一郎', room_number='101', floor='1',
            medication_morning=True, medication_week_monday=True,
        )
        self.client.force_authenticate(self.nurse)

    # -----------------------------------------------------------------
    # auth
    # -----------------------------------------------------------------
    def test_login_returns_token_and_jwt_pair(self):
        client = APIClient()
        r = client.post(reverse('login_view'), {'username': 'nurse1', 'password': 'P@ssw0rd1', 'role': 'admin'},
                        format='json')
        self.assertEqual(r.status_code, 200)
        self.assertTrue(r.data['token'])
        self.assertTrue(r.data['jwt_access'])
        self.assertTrue(r.data['jwt_refresh'])
        self.assertEqual(r.data['role'], 'nurse')
        self.assertTrue(AuditEvent.objects.filter(action='login', user=self.nurse).exists())

        client.credentials(HTTP_AUTHORIZATION=f"Token {r.data['token']}")
        self.assertEqual(client.get(reverse('residents')).status_code, 200)

    def test_login_rejects_wrong_password(self):
        r = APIClient().post(reverse('login_view'), {'username': 'nurse1', 'password': 'nope'}, format='json')
        self.assertEqual(r.status_code, 400)
        self.assertFalse(r.data['ok'])

    def test_expired_token_is_rejected_and_reissued(self):
        token = Token.objects.create(user=self.nurse)
        Token.objects.filter(pk=token.pk).update(created=timezone.now() - timedelta(hours=25))
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f'Token {token.key}')

        r = client.get(reverse('residents'))
        self.assertEqual(r.status_code, 401)
        self.assertEqual(r.data['error']['code'], 'authentication_failed')

        fresh = issue_token(self.nurse)
        self.assertNotEqual(fresh.key, token.key)
        client.credentials(HTTP_AUTHORIZATION=f'Token {fresh.key}')
        self.assertEqual(client.get(reverse('residents')).status_code, 200)

    def test_anonymous_request_is_rejected_with_error_envelope(self):
        r = APIClient().get(reverse('daily_records'), {'date': '2025-03-10'})
        self.assertEqual(r.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(r.data['ok'], False)
        self.assertEqual(r.data['error']['code'], 'not_authenticated')

    # -----------------------------------------------------------------
    # daily records
    # -----------------------------------------------------------------
    def test_daily_records_endpoint(self):
        CareRecord.objects.create(resident=self.resident, staff_id=str(self.carer.id), record_date=at(10),
                                  description='散歩')
        MedicationRecord.objects.create(resident=self.resident, record_date=DAY, timing=c.TIMING_POST_BREAKFAST,
                                        confirmer1=str(self.nurse.id), confirmer2=str(self.carer.id))

        r = self.client.get(reverse('daily_records'), {'date': '2025-03-10'})

        self.assertEqual(r.status_code, 200)
        self.assertEqual([e['recordType'] for e in r.data], [c.CARE_NOTE, c.MEDICATION])
        self.assertEqual(r.data[0]['recordTime'], '2025-03-10T10:00:00+09:00')
        self.assertEqual(r.data[0]['staffName'], '介護 太郎')
        self.assertEqual(r.data[1]['staffName'], '看護 花子')

        r = self.client.get(reverse('daily_records'), {'date': '2025-03-10', 'recordTypes': '服薬'})
        self.assertEqual([e['recordType'] for e in r.data], [c.MEDICATION])

    def test_daily_records_requires_date(self):
        r = self.client.get(reverse('daily_records'))
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.data['error']['code'], 'invalid')

    def test_daily_records_accepts_repeated_record_types(self):
        CareRecord.objects.create(resident=self.resident, staff_id=str(self.carer.id), record_date=at(10),
                                  description='散歩')
        MedicationRecord.objects.create(resident=self.resident, record_date=DAY, timing=c.TIMING_POST_BREAKFAST,
                                        confirmer1=str(self.nurse.id), confirmer2=str(self.carer.id))

        r = self.client.get(f"{reverse('daily_records')}?date=2025-03-10&recordTypes=様子&recordTypes=服薬")

        self.assertEqual(r.status_code, 200)
        self.assertEqual([e['recordType'] for e in r.data], [c.CARE_NOTE, c.MEDICATION])

    # -----------------------------------------------------------------
    # medication
    # -----------------------------------------------------------------
    def test_medication_list_includes_placeholders(self):
        r = self.client.get(reverse('medication_records'), {'recordDate': '2025-03-10', 'timing': '朝後'})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(len(r.data), 1)
        self.assertTrue(r.data[0]['isPlaceholder'])
        self.assertEqual(r.data[0]['id'], f'placeholder-{self.resident.id}-朝後')

    def test_medication_post_is_an_upsert(self):
        body = {'residentId': str(self.resident.id), 'recordDate': '2025-03-10', 'timing': '朝後',
                'confirmer1': str(self.nurse.id)}
        r = self.client.post(reverse('medication_records'), body, format='json')
        self.assertEqual(r.status_code, 201)

        body['confirmer2'] = str(self.carer.id)
        r = self.client.post(reverse('medication_records'), body, format='json')
        self.assertEqual(r.status_code, 200)
        self.assertEqual(MedicationRecord.objects.count(), 1)
        record = MedicationRecord.objects.get()
        self.assertEqual(record.confirmer2, str(self.carer.id))
        self.assertEqual(record.created_by, str(self.nurse.id))

        r = self.client.get(reverse('medication_records'), {'recordDate': '2025-03-10', 'timing': '朝後'})
        self.assertEqual([e['isPlaceholder'] for e in r.data], [False])

    def test_medication_update_and_delete(self):
        record = MedicationRecord.objects.create(resident=self.resident, record_date=DAY, timing='朝後',
                                                 confirmer1='a')
        url = reverse('medication_record_detail', args=[record.id])
        r = self.client.put(url, {'confirmer2': 'b', 'result': '○'}, format='json')
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data['confirmer2'], 'b')
        r = self.client.delete(url)
        self.assertEqual(r.status_code, 200)
        self.assertFalse(MedicationRecord.objects.exists())
        self.assertEqual(self.client.delete(url).status_code, 404)

    def test_medication_range(self):
        r = self.client.get(reverse('medication_records_range'),
                            {'dateFrom': '2025-03-10', 'dateTo': '2025-03-16', 'timing': 'all'})
        self.assertEqual(r.status_code, 200)
        # only Monday is scheduled
        self.assertEqual([e['recordDate'] for e in r.data], ['2025-03-10'])

        r = self.client.get(reverse('medication_records_range'), {'dateFrom': '2025-03-16', 'dateTo': '2025-03-10'})
        self.assertEqual(r.status_code, 400)

    # -----------------------------------------------------------------
    # residents & staff
    # -----------------------------------------------------------------
    def test_resident_list_filters_floor_and_inactive(self):
        Resident.objects.create(name='二階 花子', room_number='201', floor='2階')
        Resident.objects.create(name='退居 者', room_number='102', floor='1', is_active=False)

        r = self.client.get(reverse('residents'), {'floor': '1'})
        self.assertEqual([x['name'] for x in r.data], ['山田 一郎'])
        self.assertIn('medicationWeekMonday', r.data[0])

        r = self.client.get(reverse('residents'), {'floor': '1', 'includeInactive': 'true'})
        self.assertEqual(len(r.data), 2)

        r = self.client.get(reverse('residents'), {'floor': '2'})
        self.assertEqual([x['name'] for x in r.data], ['二階 花子'])

    def test_resident_crud(self):
        r = self.client.post(reverse('residents'), {'name': '新規 入居', 'roomNumber': '103', 'floor': '1'},
                             format='json')
        self.assertEqual(r.status_code, 201)
        url = reverse('resident_detail', args=[r.data['id']])
        r = self.client.put(url, {'careLevel': '要介護2'}, format='json')
        self.assertEqual(r.data['careLevel'], '要介護2')
        self.assertEqual(self.client.delete(url).status_code, 200)
        self.assertEqual(self.client.get(url).status_code, 404)

    def test_staff_writes_require_admin(self):
        body = {'staffId': 's002', 'staffName': '介護 次郎'}
        r = self.client.post(reverse('staff_list'), body, format='json')
        self.assertEqual(r.status_code, 403)

        self.client.force_authenticate(self.admin)
        r = self.client.post(reverse('staff_list'), body, format='json')
        self.assertEqual(r.status_code, 201)
        self.assertEqual(r.data['staffName'], '介護 次郎')

        self.client.force_authenticate(self.nurse)
        r = self.client.get(reverse('staff_list'))
        self.assertEqual(len(r.data), 2)

    # -----------------------------------------------------------------
    # record CRUD
    # -----------------------------------------------------------------
    def test_care_record_crud_sanitizes_and_audits(self):
        r = self.client.post(reverse('care_records'), {
            'residentId': str(self.resident.id),
            'staffId': str(self.carer.id),
            'recordDate': '2025-03-10T10:00:00+09:00',
            'description': '<b>元気</b>に過ごされた',
        }, format='json')
        self.assertEqual(r.status_code, 201)
        self.assertEqual(r.data['description'], '元気に過ごされた')
        self.assertEqual(str(r.data['residentId']), str(self.resident.id))
        self.assertTrue(AuditEvent.objects.filter(action='care_record.create', object_id=r.data['id']).exists())

        listing = self.client.get(reverse('care_records'), {'date': '2025-03-10', 'residentId': str(self.resident.id)})
        self.assertEqual(len(listing.data), 1)
        self.assertEqual(len(self.client.get(reverse('care_records'), {'date': '2025-03-11'}).data), 0)

        url = reverse('care_record_detail', args=[r.data['id']])
        r = self.client.put(url, {'description': '午後は休息'}, format='json')
        self.assertEqual(r.data['description'], '午後は休息')
        self.assertEqual(self.client.delete(url).status_code, 200)
        self.assertEqual(self.client.get(url).status_code, 404)

    def test_vital_sign_rejects_invalid_hour(self):
        r = self.client.post(reverse('vital_signs'), {
            'residentId': str(self.resident.id), 'recordDate': '2025-03-10T09:00:00+09:00', 'hour': 25,
        }, format='json')
        self.assertEqual(r.status_code, 400)
        self.assertFalse(r.data['ok'])

    def test_cleaning_linen_post_overwrites_same_day(self):
        body = {'residentId': str(self.resident.id), 'recordDate': '2025-03-10', 'cleaningValue': '○'}
        self.assertEqual(self.client.post(reverse('cleaning_linen_records'), body, format='json').status_code, 201)
        body['linenValue'] = '2'
        r = self.client.post(reverse('cleaning_linen_records'), body, format='json')
        self.assertEqual(r.status_code, 200)
        record = CleaningLinenRecord.objects.get()
        self.assertEqual(record.linen_value, '2')
        # Monday
        self.assertEqual(record.day_of_week, 1)

    def test_nursing_record_for_whole_facility(self):
        r = self.client.post(reverse('nursing_records'), {
            'recordDate': '2025-03-10T11:00:00+09:00', 'category': c.NURSING_NOTE, 'description': '全体連絡',
        }, format='json')
        self.assertEqual(r.status_code, 201)
        self.assertIsNone(r.data['residentId'])

    def test_nursing_record_changes_announce_normalized_category(self):
        with mock.patch('care.views.records.broadcast_records_changed') as announce:
            r = self.client.post(reverse('nursing_records'), {
                'residentId': str(self.resident.id), 'recordDate': '2025-03-10T11:00:00+09:00',
                'category': 'assessment', 'interventions': '軟膏塗布', 'notes': '発赤あり',
            }, format='json')
            self.assertEqual(r.status_code, 201)
            self.assertEqual(announce.call_args.args[:2], (c.TREATMENT, 'created'))

            url = reverse('nursing_record_detail', args=[r.data['id']])
            self.client.put(url, {'category': 'intervention'}, format='json')
            self.assertEqual(announce.call_args.args[:2], (c.MEDICAL_NOTE, 'updated'))

            self.client.delete(url)
            self.assertEqual(announce.call_args.args[:2], (c.MEDICAL_NOTE, 'deleted'))

    # -----------------------------------------------------------------
    # facility settings & ops
    # -----------------------------------------------------------------
    def test_facility_settings_single_row(self):
        self.assertIsNone(self.client.get(reverse('facility_settings')).data)
        r = self.client.post(reverse('facility_settings'), {'facilityName': 'さくら苑', 'dayShiftFrom': '08:31'},
                             format='json')
        self.assertEqual(r.status_code, 201)
        r = self.client.put(reverse('facility_settings'), {'dayShiftTo': '17:30'}, format='json')
        self.assertEqual(r.status_code, 200)
        self.assertEqual(FacilitySettings.objects.count(), 1)
        data = self.client.get(reverse('facility_settings')).data
        self.assertEqual((data['facilityName'], data['dayShiftTo']), ('さくら苑', '17:30'))

        r = self.client.put(reverse('facility_settings'), {'dayShiftTo': '25:00'}, format='json')
        self.assertEqual(r.status_code, 400)

    def test_healthz(self):
        r = APIClient().get(reverse('healthz'))
        self.assertEqual(r.status_code, 200)
        self.assertTrue(r.json()['ok'])
