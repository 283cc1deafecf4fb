"""CSS selectors for the DemoQA pages (single source of truth)."""

# Web Tables
ADD_BUTTON = "#addNewRecordButton"
USER_FORM = "#userForm"
SUBMIT = "#submit"
OPEN_MODAL = ".modal.fade.show"
FIELDS = {
    "First Name": "#firstName",
    "Last Name": "#lastName",
    "Email": "#userEmail",
    "Age": "#age",
    "Salary": "#salary",
    "Department": "#department",
}
# cell index of each column inside a row
COLUMNS = {
    "First Name": 0,
    "Last Name": 1,
    "Age": 2,
    "Email": 3,
    "Salary": 4,
    "Department": 5,
}

TABLE = ".rt-table, .web-tables-wrapper"
TABLE_BODY = ".rt-tbody"
ROW = ".rt-tbody .rt-tr-group"
# React Table pads short pages with placeholder rows
DATA_ROW = ".rt-tbody .rt-tr-group:not(.-padRow)"
CELL = ".rt-td"
ALL_CELLS = ".rt-tbody .rt-td"

SEARCH_BOX = "#searchBox"
DELETE_BUTTON = 'span[id^="delete-record-"]'
DELETE_BUTTON_SVG = (
    ".//*[local-name()='svg'][*[local-name()='title' and normalize-space()='Delete']]"
    "/ancestor::span[starts-with(@id, 'delete-record-')]"
)
EDIT_BUTTON = 'span[id^="edit-record-"]'

# Pagination
PAGINATION = ".-pagination"
PAGE_INFO = ".-pageInfo"
PAGE_JUMP = ".-pageJump input"
NEXT_PAGE = ".-next button"
PREVIOUS_PAGE = ".-previous button"
LAST_PAGE = ".-last button"

# Upload and Download
DOWNLOAD_BUTTON = "#downloadButton"
UPLOAD_INPUT = "#uploadFile"
UPLOADED_PATH = "#uploadedFilePath"

# Navigation
MAIN_HEADER = ".main-header"
# the category cards on the home page (Elements, Forms, ...)
HOME_CARD = ".card.mt-4.top-card"
LEFT_MENU_ITEM = ".element-group .menu-list li span"

# Dynamic Properties
ENABLE_AFTER = "#enableAfter"
COLOR_CHANGE = "#colorChange"
VISIBLE_AFTER = "#visibleAfter"
DYNAMIC_BUTTONS = {
    "Enable After": ENABLE_AFTER,
    "Color Change": COLOR_CHANGE,
    "Visible After": VISIBLE_AFTER,
}
RANDOM_ID_TEXT = "//p[contains(normalize-space(), 'This text has random Id')]"

# Practice Form
PRACTICE_FORM = "#userForm"
PRACTICE_FIELDS = {
    "First Name": "#firstName",
    "Last Name": "#lastName",
    "Email": "#userEmail",
    "Mobile": "#userNumber",
    "Current Address": "#currentAddress",
}
GENDER_INPUTS = 'input[name="gender"]'
GENDER_LABELS = {
    "Male": 'label[for="gender-radio-1"]',
    "Female": 'label[for="gender-radio-2"]',
    "Other": 'label[for="gender-radio-3"]',
}
HOBBY_LABELS = {
    "Sports": 'label[for="hobbies-checkbox-1"]',
    "Reading": 'label[for="hobbies-checkbox-2"]',
    "Music": 'label[for="hobbies-checkbox-3"]',
}
HOBBY_INPUTS = {
    "Sports": "#hobbies-checkbox-1",
    "Reading": "#hobbies-checkbox-2",
    "Music": "#hobbies-checkbox-3",
}
PICTURE_INPUT = "#uploadPicture"
FORM_SUBMIT = "#submit"
STATE_CONTROL = "#state"
CITY_CONTROL = "#city"
# react-select parts
DROPDOWN_INDICATOR = '[class$="-indicatorContainer"]'
DROPDOWN_INPUT = "input"
DROPDOWN_MENU = '[role="listbox"], [id$="-listbox"], div[id*="-menu"], div[class$="-menu"]'
DROPDOWN_OPTION = '[role="option"], [id*="-option-"], div[class$="-option"]'
RESULT_TITLE = "#example-modal-sizes-title-lg"
RESULT_BODY = ".modal-body"
CLOSE_RESULT = "#closeLargeModal"
SHOWN_MODAL = ".modal.show"

# Alerts, Frames and Windows
ALERT_BUTTONS = {
    "Click me": "#alertButton",
    "On button click, alert will appear after 5 seconds": "#timerAlertButton",
}
CONFIRM_BUTTON = "#confirmButton"
PROMPT_BUTTON = "#promtButton"
CONFIRM_RESULT = "#confirmResult"
PROMPT_RESULT = "#promptResult"
PARENT_FRAME = "iframe#frame1"
CHILD_FRAME = "iframe"
TAB_BUTTON = "#tabButton"
SAMPLE_HEADING = "#sampleHeading"

# Slow third-party hosts that can hold up the load event
THIRD_PARTY_URLS = [
    "*pagead2.googlesyndication.com*",
    "*googletagmanager.com*",
    "*google-analytics.com*",
    "*doubleclick.net*",
    "*gstatic.com*",
    "*fonts.googleapis.com*",
    "*connect.facebook.net*",
    "*static.hotjar.com*",
    "*script.hotjar.com*",
]
