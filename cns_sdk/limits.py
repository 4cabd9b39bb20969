"""Field limits shared by the builder and the validator."""

MAX_TITLE_LENGTH = 50
MAX_SUMMARY_LENGTH = 100
MAX_SMS_DESCRIPTION_LENGTH = 400
MAX_URL_LENGTH = 2000
MAX_TYPE_NAME_LENGTH = 100
MAX_USERNAME_LENGTH = 100
MAX_EMAIL_LENGTH = 100

# Notifications may not expire more than this many days after "now".
MAX_EXPIRATION_DAYS = 30
