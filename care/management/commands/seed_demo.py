"""
Management command to populate the database with demo data.
"""
from datetime import datetime, time, timedelta

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from care import constants as c
from care.models import (
    CareRecord, CleaningLinenRecord, ExcretionRecord, MealRecord, MedicationRecord,
    NursingRecord, Resident, Staff, User, VitalSign, WeightRecord,
)


class Command(BaseCommand):
    help = 'Populate database with demo residents, staff and one day of records'

    def add_arguments(self, parser):
        parser.add_argument('--date', help='record date (YYYY-MM-DD), defaults to today')
        parser.add_argument('--password', default='demo-pass-1234', help='password of the demo accounts')

    @transaction.atomic
    def handle(self, *args, **options):
        day = (datetime.strptime(options['date'], '%Y-%m-%d').date()
               if options.get('date') else timezone.localdate())
        self.stdout.write(f'デモデータを作成します ({day})...')

        users = self.create_users(options['password'])
        staff = self.create_staff()
        residents = self.create_residents()
        self.create_records(day, residents, staff, users)

        self.stdout.write(self.style.SUCCESS(
            f'Created {len(users)} users, {len(staff)} staff, {len(residents)} residents'
        ))

    def create_users(self, password):
        users = []
        for username, first_name, role in [
            ('admin', '管理者', 'admin'),
            ('nurse1', '看護 花子', 'nurse'),
            ('staff1', '介護 太郎', 'staff'),
        ]:
            user, created = User.objects.get_or_create(
                username=username, defaults={'first_name': first_name, 'role': role},
            )
            if created:
                user.set_password(password)
                user.save()
            users.append(user)
        return users

    def create_staff(self):
        staff = []
        for i, (staff_id, name, floor) in enumerate([
            ('staff1', '介護 太郎', '1'),
            ('staff2', '介護 次郎', '2'),
            ('nurse1', '看護 花子', '1'),
        ]):
            obj, _ = Staff.objects.get_or_create(
                staff_id=staff_id,
                defaults={'staff_name': name, 'floor': floor, 'status': '有効', 'sort_order': i},
            )
            staff.append(obj)
        return staff

    def create_residents(self):
        week = {name: True for name in Resident.WEEKDAY_FIELDS}
        residents = []
        for room, name, floor in [('101', '山田 一郎', '1'), ('102', '佐藤 花', '1'), ('201', '鈴木 次郎', '2階')]:
            obj, _ = Resident.objects.get_or_create(
                room_number=room, name=name,
                defaults={
                    'floor': floor,
                    'medication_morning': True,
                    'medication_evening': True,
                    'eye_drops_sleep': room == '102',
                    **week,
                },
            )
            residents.append(obj)
        return residents

    def create_records(self, day, residents, staff, users):
        def at(h, m=0):
            return datetime.combine(day, time(h, m), tzinfo=c.JST)

        carer, _, nurse = staff
        first = residents[0]
        CareRecord.objects.create(resident=first, staff_id=str(carer.id), record_date=at(10, 15),
                                  description='午前中はリビングで過ごされた')
        MealRecord.objects.create(resident=first, staff_id=str(carer.id), record_date=at(8),
                                  meal_type='朝', main_amount='10', side_amount='8', staff_name=carer.staff_name)
        VitalSign.objects.create(resident=first, staff_name=str(nurse.id), record_date=at(9),
                                 timing='午前', hour=9, minute=30, temperature='36.5',
                                 blood_pressure_systolic=120, blood_pressure_diastolic=80, pulse_rate=70)
        MedicationRecord.objects.get_or_create(
            resident=first, record_date=day, timing=c.TIMING_POST_BREAKFAST, type=c.MEDICATION_TYPE_ORAL,
            defaults={'confirmer1': str(carer.id), 'confirmer2': str(nurse.id), 'created_by': str(users[0].id)},
        )
        ExcretionRecord.objects.create(resident=first, staff_id=str(carer.id), record_date=at(7, 10),
                                       type=c.EXCRETION_URINATION, amount='多', urine_volume_cc=200)
        ExcretionRecord.objects.create(resident=first, staff_id=str(carer.id), record_date=at(7, 10),
                                       type=c.EXCRETION_BOWEL, consistency='普通', amount='中')
        CleaningLinenRecord.objects.get_or_create(
            resident=first, record_date=day,
            defaults={'day_of_week': (day.weekday() + 1) % 7, 'cleaning_value': '○', 'staff_id': str(carer.id)},
        )
        WeightRecord.objects.create(resident=first, staff_name=carer.staff_name, record_date=at(14), weight='52.4')
        NursingRecord.objects.create(nurse_id=str(users[1].id), record_date=at(16, 0), category=c.NURSING_NOTE,
                                     description='フロア全体の換気を実施')
        NursingRecord.objects.create(resident=residents[1], nurse_id=str(nurse.id), record_date=at(21, 30),
                                     category='assessment', notes='発赤あり', interventions='軟膏塗布',
                                     description='仙骨部の処置')
        # previous evening's unconfirmed slot shows up as a placeholder
        MedicationRecord.objects.get_or_create(
            resident=residents[1], record_date=day - timedelta(days=1), timing=c.TIMING_POST_DINNER,
            type=c.MEDICATION_TYPE_ORAL, defaults={'confirmer1': str(carer.id)},
        )
