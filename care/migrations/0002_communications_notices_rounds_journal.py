# Communications, staff notices, night rounds and journals; clock range checks

import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


JOURNAL_TYPE_CHOICES = [('日中', '日中'), ('夜間', '夜間'), ('看護', '看護')]


def _clock(limit):
    return models.PositiveSmallIntegerField(
        blank=True, null=True, validators=[django.core.validators.MaxValueValidator(limit)]
    )


class Migration(migrations.Migration):

    dependencies = [
        ('care', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(model_name='vitalsign', name='hour', field=_clock(23)),
        migrations.AlterField(model_name='vitalsign', name='minute', field=_clock(59)),
        migrations.AlterField(model_name='bathingrecord', name='hour', field=_clock(23)),
        migrations.AlterField(model_name='bathingrecord', name='minute', field=_clock(59)),
        migrations.CreateModel(
            name='Communication',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('staff_id', models.CharField(blank=True, max_length=64)),
                ('record_date', models.DateTimeField()),
                ('category', models.CharField(choices=[('handover', 'handover'), ('incident', 'incident'), ('general', 'general')], max_length=20)),
                ('priority', models.CharField(choices=[('low', 'low'), ('normal', 'normal'), ('high', 'high'), ('urgent', 'urgent')], default='normal', max_length=10)),
                ('subject', models.CharField(max_length=200)),
                ('message', models.TextField()),
                ('is_read', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('resident', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='communications', to='care.resident')),
            ],
            options={
                'indexes': [models.Index(fields=['record_date'], name='communication_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='StaffNotice',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_by', models.CharField(blank=True, max_length=64)),
                ('title', models.CharField(blank=True, max_length=200)),
                ('content', models.TextField()),
                ('start_date', models.DateField()),
                ('end_date', models.DateField()),
                ('target_floor', models.CharField(default='全階', help_text='全階, 1階, 2階 ...', max_length=20)),
                ('target_job_role', models.CharField(choices=[('全体', '全体'), ('介護', '介護'), ('施設看護', '施設看護'), ('訪問看護', '訪問看護')], default='全体', max_length=20)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='StaffNoticeReadStatus',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('read_at', models.DateTimeField(auto_now_add=True)),
                ('notice', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='read_statuses', to='care.staffnotice')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='notice_reads', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'constraints': [models.UniqueConstraint(fields=('notice', 'user'), name='unique_notice_read')],
            },
        ),
        migrations.CreateModel(
            name='RoundRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('record_date', models.DateField()),
                ('hour', models.PositiveSmallIntegerField(validators=[django.core.validators.MaxValueValidator(23)])),
                ('record_type', models.CharField(choices=[('patrol', 'patrol'), ('position_change', 'position change'), ('notes', 'notes')], max_length=20)),
                ('staff_name', models.CharField(max_length=100)),
                ('position_value', models.CharField(blank=True, choices=[('右', '右'), ('左', '左'), ('仰', '仰')], max_length=2)),
                ('notes', models.TextField(blank=True)),
                ('created_by', models.CharField(blank=True, max_length=64)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('resident', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='round_records', to='care.resident')),
            ],
            options={
                'indexes': [models.Index(fields=['record_date', 'hour'], name='round_date_hour_idx')],
            },
        ),
        migrations.CreateModel(
            name='JournalEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('record_date', models.DateField()),
                ('record_type', models.CharField(choices=JOURNAL_TYPE_CHOICES, max_length=10)),
                ('entered_by', models.CharField(blank=True, max_length=100, null=True)),
                ('resident_count', models.PositiveIntegerField(default=0)),
                ('hospitalized_count', models.PositiveIntegerField(default=0)),
                ('floor', models.CharField(blank=True, max_length=20)),
                ('created_by', models.CharField(blank=True, max_length=64)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'constraints': [models.UniqueConstraint(fields=('record_date', 'record_type', 'floor'), name='unique_journal_entry')],
            },
        ),
        migrations.CreateModel(
            name='JournalCheckbox',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('record_date', models.DateField()),
                ('record_id', models.CharField(max_length=100)),
                ('record_type', models.CharField(max_length=20)),
                ('checkbox_type', models.CharField(choices=JOURNAL_TYPE_CHOICES, max_length=10)),
                ('is_checked', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'constraints': [models.UniqueConstraint(fields=('record_id', 'record_type', 'checkbox_type'), name='unique_journal_checkbox')],
                'indexes': [models.Index(fields=['record_date'], name='journal_checkbox_date_idx')],
            },
        ),
    ]
