# Initial schema for the care app

import uuid

import django.contrib.auth.models
import django.contrib.auth.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


SLOT_CHOICES = [
    ('起床後', '起床後'), ('朝前', '朝前'), ('朝後', '朝後'),
    ('昼前', '昼前'), ('昼後', '昼後'), ('夕前', '夕前'),
    ('夕後', '夕後'), ('眠前', '眠前'), ('頓服', '頓服'),
]
CLEANING_CHOICES = [('○', '○'), ('2', '2'), ('3', '3'), ('', '')]


def _flags(prefix, names):
    return [(f'{prefix}{n}', models.BooleanField(default=False)) for n in names]


SLOT_NAMES = ['wakeup', 'morning_before', 'morning', 'noon_before', 'noon',
              'evening_before', 'evening', 'sleep', 'as_needed']
WEEKDAY_NAMES = ['monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday']


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
    ]

    operations = [
        migrations.CreateModel(
            name='User',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('is_superuser', models.BooleanField(default=False, help_text='Designates that this user has all permissions without explicitly assigning them.', verbose_name='superuser status')),
                ('username', models.CharField(error_messages={'unique': 'A user with that username already exists.'}, help_text='Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.', max_length=150, unique=True, validators=[django.contrib.auth.validators.UnicodeUsernameValidator()], verbose_name='username')),
                ('first_name', models.CharField(blank=True, max_length=150, verbose_name='first name')),
                ('last_name', models.CharField(blank=True, max_length=150, verbose_name='last name')),
                ('email', models.EmailField(blank=True, max_length=254, verbose_name='email address')),
                ('is_staff', models.BooleanField(default=False, help_text='Designates whether the user can log into this admin site.', verbose_name='staff status')),
                ('is_active', models.BooleanField(default=True, help_text='Designates whether this user should be treated as active. Unselect this instead of deleting accounts.', verbose_name='active')),
                ('date_joined', models.DateTimeField(default=django.utils.timezone.now, verbose_name='date joined')),
                ('role', models.CharField(choices=[('staff', 'Staff'), ('nurse', 'Nurse'), ('admin', 'Administrator')], default='staff', max_length=10)),
                ('groups', models.ManyToManyField(blank=True, help_text='The groups this user belongs to. A user will get all permissions granted to each of their groups.', related_name='user_set', related_query_name='user', to='auth.group', verbose_name='groups')),
                ('user_permissions', models.ManyToManyField(blank=True, help_text='Specific permissions for this user.', related_name='user_set', related_query_name='user', to='auth.permission', verbose_name='user permissions')),
            ],
            options={
                'verbose_name': 'user',
                'verbose_name_plural': 'users',
                'abstract': False,
            },
            managers=[
                ('objects', django.contrib.auth.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name='Staff',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('staff_id', models.CharField(help_text='職員ID（ログインID）', max_length=50, unique=True)),
                ('staff_name', models.CharField(max_length=100)),
                ('staff_name_kana', models.CharField(blank=True, max_length=100)),
                ('floor', models.CharField(blank=True, max_length=20)),
                ('job_role', models.CharField(blank=True, max_length=50)),
                ('authority', models.CharField(blank=True, max_length=50)),
                ('status', models.CharField(default='ロック', max_length=20)),
                ('sort_order', models.IntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['sort_order', 'staff_name'],
            },
        ),
        migrations.CreateModel(
            name='Resident',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('room_number', models.CharField(blank=True, max_length=20)),
                ('floor', models.CharField(blank=True, db_index=True, max_length=20)),
                ('name', models.CharField(max_length=100)),
                ('gender', models.CharField(blank=True, max_length=10)),
                ('date_of_birth', models.DateField(blank=True, null=True)),
                ('admission_date', models.DateField(blank=True, null=True)),
                ('retirement_date', models.DateField(blank=True, null=True)),
                ('care_level', models.CharField(blank=True, max_length=20)),
                ('attending_physician', models.CharField(blank=True, max_length=100)),
            ]
            + _flags('medication_', SLOT_NAMES)
            + _flags('eye_drops_', SLOT_NAMES)
            + _flags('medication_week_', WEEKDAY_NAMES)
            + [
                ('notes', models.TextField(blank=True)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['room_number', 'name'],
            },
        ),
        migrations.CreateModel(
            name='CareRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('staff_id', models.CharField(blank=True, max_length=64)),
                ('record_date', models.DateTimeField()),
                ('category', models.CharField(blank=True, max_length=50)),
                ('description', models.TextField(blank=True)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('resident', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='care_records', to='care.resident')),
            ],
            options={
                'indexes': [models.Index(fields=['record_date'], name='care_record_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='NursingRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('nurse_id', models.CharField(blank=True, max_length=64)),
                ('record_date', models.DateTimeField()),
                ('category', models.CharField(blank=True, max_length=50)),
                ('description', models.TextField(blank=True)),
                ('notes', models.TextField(blank=True)),
                ('interventions', models.TextField(blank=True)),
                ('outcomes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('resident', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='nursing_records', to='care.resident')),
            ],
            options={
                'indexes': [models.Index(fields=['record_date'], name='nursing_record_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='VitalSign',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('staff_id', models.CharField(blank=True, max_length=64)),
                ('record_date', models.DateTimeField()),
                ('timing', models.CharField(blank=True, help_text='午前, 午後, 臨時, 前日', max_length=10)),
                ('hour', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('minute', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('staff_name', models.CharField(blank=True, help_text='記入者', max_length=100)),
                ('temperature', models.DecimalField(blank=True, decimal_places=1, max_digits=4, null=True)),
                ('blood_pressure_systolic', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('blood_pressure_diastolic', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('pulse_rate', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('respiration_rate', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('oxygen_saturation', models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ('blood_sugar', models.CharField(blank=True, max_length=20)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('resident', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='vital_signs', to='care.resident')),
            ],
            options={
                'indexes': [models.Index(fields=['record_date'], name='vital_record_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='MealRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('staff_id', models.CharField(blank=True, max_length=64)),
                ('record_date', models.DateTimeField()),
                ('meal_type', models.CharField(blank=True, max_length=10)),
                ('main_amount', models.CharField(blank=True, max_length=20)),
                ('side_amount', models.CharField(blank=True, max_length=20)),
                ('water_intake', models.CharField(blank=True, max_length=20)),
                ('supplement', models.CharField(blank=True, max_length=100)),
                ('staff_name', models.CharField(blank=True, max_length=100)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('resident', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='meal_records', to='care.resident')),
            ],
            options={
                'indexes': [models.Index(fields=['record_date'], name='meal_record_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='BathingRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('staff_id', models.CharField(blank=True, max_length=64)),
                ('record_date', models.DateTimeField()),
                ('timing', models.CharField(blank=True, max_length=10)),
                ('hour', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('minute', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('staff_name', models.CharField(blank=True, max_length=100)),
                ('bath_type', models.CharField(blank=True, help_text='入浴, シャワー浴, 清拭, ×', max_length=20)),
                ('temperature', models.CharField(blank=True, max_length=10)),
                ('weight', models.CharField(blank=True, max_length=10)),
                ('blood_pressure_systolic', models.CharField(blank=True, max_length=10)),
                ('blood_pressure_diastolic', models.CharField(blank=True, max_length=10)),
                ('pulse_rate', models.CharField(blank=True, max_length=10)),
                ('oxygen_saturation', models.CharField(blank=True, max_length=10)),
                ('notes', models.TextField(blank=True)),
                ('rejection_reason', models.TextField(blank=True)),
                ('nursing_check', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('resident', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='bathing_records', to='care.resident')),
            ],
            options={
                'indexes': [models.Index(fields=['record_date'], name='bathing_record_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='ExcretionRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('staff_id', models.CharField(blank=True, max_length=64)),
                ('record_date', models.DateTimeField()),
                ('type', models.CharField(choices=[('urination', 'urination'), ('bowel_movement', 'bowel movement'), ('general_note', 'general note')], max_length=20)),
                ('consistency', models.CharField(blank=True, max_length=20)),
                ('amount', models.CharField(blank=True, max_length=20)),
                ('urine_volume_cc', models.PositiveIntegerField(blank=True, null=True)),
                ('assistance', models.CharField(blank=True, max_length=20)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('resident', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='excretion_records', to='care.resident')),
            ],
            options={
                'indexes': [models.Index(fields=['record_date', 'type'], name='excretion_date_type_idx')],
            },
        ),
        migrations.CreateModel(
            name='WeightRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('staff_id', models.CharField(blank=True, max_length=64)),
                ('record_date', models.DateTimeField(blank=True, null=True)),
                ('staff_name', models.CharField(blank=True, max_length=100)),
                ('weight', models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('resident', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='weight_records', to='care.resident')),
            ],
            options={
                'indexes': [models.Index(fields=['record_date'], name='weight_record_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='CleaningLinenRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('record_date', models.DateField()),
                ('record_time', models.DateTimeField(blank=True, null=True)),
                ('day_of_week', models.PositiveSmallIntegerField(help_text='0=日曜 ... 6=土曜')),
                ('cleaning_value', models.CharField(blank=True, choices=CLEANING_CHOICES, max_length=2)),
                ('linen_value', models.CharField(blank=True, choices=CLEANING_CHOICES, max_length=2)),
                ('record_note', models.TextField(blank=True)),
                ('staff_id', models.CharField(blank=True, max_length=64)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('resident', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='cleaning_linen_records', to='care.resident')),
            ],
            options={
                'unique_together': {('resident', 'record_date')},
            },
        ),
        migrations.CreateModel(
            name='MedicationRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('record_date', models.DateField()),
                ('timing', models.CharField(choices=SLOT_CHOICES, max_length=10)),
                ('confirmer1', models.CharField(blank=True, max_length=100, null=True)),
                ('confirmer2', models.CharField(blank=True, max_length=100, null=True)),
                ('notes', models.TextField(blank=True, null=True)),
                ('type', models.CharField(choices=[('服薬', '服薬'), ('点眼', '点眼')], default='服薬', max_length=10)),
                ('result', models.CharField(blank=True, help_text='○, −, 拒否, 外出', max_length=10)),
                ('created_by', models.CharField(blank=True, max_length=64)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('resident', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='medication_records', to='care.resident')),
            ],
            options={
                'constraints': [models.UniqueConstraint(fields=('resident', 'record_date', 'timing', 'type'), name='unique_medication_record')],
            },
        ),
        migrations.CreateModel(
            name='FacilitySettings',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('care_type', models.CharField(blank=True, choices=[('訪問介護', '訪問介護'), ('デイケア', 'デイケア'), ('デイサービス', 'デイサービス')], max_length=20)),
                ('facility_name', models.CharField(blank=True, max_length=200)),
                ('facility_address', models.CharField(blank=True, max_length=300)),
                ('day_shift_from', models.CharField(blank=True, help_text='HH:MM', max_length=5)),
                ('day_shift_to', models.CharField(blank=True, help_text='HH:MM', max_length=5)),
                ('weight_baseline', models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ('excretion_baseline', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('vital_setting', models.CharField(blank=True, choices=[('前日', '前日'), ('午前/午後', '午前/午後')], max_length=10)),
                ('diary_settings', models.CharField(blank=True, choices=[('フロア', 'フロア'), ('全体', '全体')], max_length=10)),
                ('detail_settings', models.CharField(blank=True, choices=[('シンプル', 'シンプル'), ('アドバンス', 'アドバンス')], max_length=10)),
                ('survey_url', models.URLField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.CreateModel(
            name='AuditEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(max_length=64)),
                ('object_type', models.CharField(blank=True, max_length=64, null=True)),
                ('object_id', models.CharField(blank=True, max_length=64, null=True)),
                ('detail', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'indexes': [
                    models.Index(fields=['action', 'created_at'], name='audit_action_idx'),
                    models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_idx'),
                ],
            },
        ),
    ]
