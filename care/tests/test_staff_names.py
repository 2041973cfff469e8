import pytest

from care.models import Staff, User
from care.services.staff_names import StaffNameResolver, load_staff_resolver


def test_first_registry_wins():
    r = StaffNameResolver([{'a': '職員A'}, {'a': 'ユーザーA', 'b': 'ユーザーB'}])
    assert r.resolve('a') == '職員A'
    assert r.resolve('b') == 'ユーザーB'


def test_unknown_reference_falls_back_to_raw_value():
    r = StaffNameResolver([{}, {}])
    assert r.resolve('山田') == '山田'


def test_empty_reference_resolves_to_empty_string():
    r = StaffNameResolver([{'': 'x'}])
    assert r.resolve(None) == ''
    assert r.resolve('') == ''


@pytest.mark.django_db
def test_load_staff_resolver_reads_both_registries():
    staff = Staff.objects.create(staff_id='s001', staff_name='介護 太郎')
    named = User.objects.create_user(username='u1', password='P@ssw0rd1', first_name='看護 花子')
    mail_only = User.objects.create_user(username='u2', password='P@ssw0rd1', email='u2@example.com')
    bare = User.objects.create_user(username='u3', password='P@ssw0rd1')

    r = load_staff_resolver()
    assert r.resolve(str(staff.id)) == '介護 太郎'
    assert r.resolve(str(named.id)) == '看護 花子'
    assert r.resolve(str(mail_only.id)) == 'u2@example.com'
    assert r.resolve(str(bare.id)) == str(bare.id)
    assert r.resolve('手書き') == '手書き'
