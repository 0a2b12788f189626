"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_RECENT_LIMIT = 10

GENDER_MALE = "male"
GENDER_FEMALE = "female"

USER_NAME_MAX = 50
EMAIL_MAX = 100
PHONE_MAX = 20
GENDER_MAX = 10
AGE_MIN = 1
AGE_MAX = 150

PRODUCT_NAME_MAX = 100
CATEGORY_MAX = 50
SALESPERSON_MAX = 50
REGION_MAX = 50
SALES_STATUS_MAX = 20

EMPLOYEE_NUMBER_MAX = 20
EMPLOYEE_NAME_MAX = 50
SSN_MAX = 20
DEPARTMENT_MAX = 50
POSITION_MAX = 50
ADDRESS_MAX = 200
EMERGENCY_CONTACT_MAX = 20
EMERGENCY_RELATION_MAX = 20
