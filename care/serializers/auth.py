from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    """Credentials posted to ``/api/auth/login``.

    ``role`` is accepted for compatibility with older clients but the
    role in the response always comes from the user record.
    """
    username = serializers.CharField(
        max_length=150,
        error_messages={'blank': 'ユーザー名を入力してください', 'required': 'ユーザー名を入力してください'},
    )
    password = serializers.CharField(
        max_length=128, trim_whitespace=False, style={'input_type': 'password'},
        error_messages={'blank': 'パスワードを入力してください', 'required': 'パスワードを入力してください'},
    )
    role = serializers.CharField(required=False, allow_blank=True, write_only=True)
