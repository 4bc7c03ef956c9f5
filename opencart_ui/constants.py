"""Application constants shared by page objects and suites."""

# Page titles
LOGIN_PAGE_TITLE = "Account Login"
ACCOUNTS_PAGE_TITLE = "My Account"

# URL fragments
LOGIN_PAGE_FRACTION_URL = "route=account/login"
ACC_PAGE_FRACTION_URL = "route=account/account"

ACC_PAGE_HEADERS_LIST = ["My Account", "My Orders", "My Affiliate Account", "Newsletter"]

USER_REGISTER_SUCCESS_MESSG = "Your Account Has Been Created!"

# Data sources
REGISTER_SHEET_NAME = "register"
PRODUCT_IMAGES_SHEET_NAME = "productimages"
TEST_DATA_WORKBOOK = "OpenCartTestData.xlsx"

# Wait timeouts, seconds
DEFAULT_TIME = 5
DEFAULT_MEDIUM_TIME = 10
POLL_FREQUENCY = 0.5

# Remote grid
GRID_SCREEN_RESOLUTION = "1280x1024x24"

REPORT_NAME = "Open Cart Automation Test Results"
