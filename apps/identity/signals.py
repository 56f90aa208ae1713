from django.dispatch import Signal

# Sent inside the account deletion transaction, before the User row is removed.
# Receivers get: user_id, email, name
user_cancelled = Signal()
