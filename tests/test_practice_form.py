"""
Test cases for the Practice Form page helper
"""

import os
from unittest import TestCase

from demoqa import selectors as S
from demoqa.practice_form import (
    ADDRESS_LENGTH,
    RESULT_TITLE,
    PracticeFormPage,
    field_selector,
    multiline_address,
    normalize_label,
    parse_list,
)
from tests.fakes import FakeBrowser, FakeDropdown, FakeElement, TextInput

URL = "https://demoqa.test/automation-practice-form"
CITIES = {"NCR": ["Delhi", "Gurgaon", "Noida"], "Haryana": ["Karnal", "Panipat"]}


class FakePracticeForm:  # pylint: disable=too-many-instance-attributes
    """The form's fields, radios, checkboxes, dropdowns and result modal on a FakeBrowser"""

    def __init__(self, city_indicator_opens=True):
        self.browser = FakeBrowser(URL)
        self.form = self.browser.add(S.PRACTICE_FORM, FakeElement(attributes={"class": ""}))
        self.fields = {
            label: self.browser.add(selector, TextInput(value="", valid=label in ("Email", "Current Address")))
            for label, selector in S.PRACTICE_FIELDS.items()
        }
        self.fields["Mobile"].attributes["maxlength"] = "10"
        self.radios = {gender: FakeElement(valid=False) for gender in S.GENDER_LABELS}
        self.browser.add(S.GENDER_INPUTS, *self.radios.values())
        for gender in S.GENDER_LABELS:
            self.browser.add(S.GENDER_LABELS[gender], FakeElement(on_click=lambda g=gender: self.choose(g)))
        self.hobbies = {}
        for name in S.HOBBY_LABELS:
            self.hobbies[name] = self.browser.add(S.HOBBY_INPUTS[name], FakeElement())
            self.browser.add(S.HOBBY_LABELS[name], FakeElement(on_click=lambda n=name: self.toggle(n)))
        self.picture = self.browser.add(S.PICTURE_INPUT, TextInput(attributes={"accept": "image/*"}))
        self.city = FakeDropdown(self.browser, [], enabled=False, indicator_opens=city_indicator_opens)
        self.state = FakeDropdown(self.browser, sorted(CITIES), on_select=self.state_chosen)
        self.browser.add(S.STATE_CONTROL, self.state)
        self.browser.add(S.CITY_CONTROL, self.city)
        self.browser.add(S.FORM_SUBMIT, FakeElement(on_click=self.submit))

    def choose(self, gender):
        for radio in self.radios.values():
            radio.valid = True
            radio.selected = False
        self.radios[gender].selected = True

    def toggle(self, name):
        self.hobbies[name].selected = not self.hobbies[name].selected

    def state_chosen(self, state):
        self.city.options = CITIES[state]
        self.city.input.enabled = True

    def submit(self):
        self.form.attributes["class"] = "was-validated"
        for label in ("First Name", "Last Name"):
            self.fields[label].valid = bool(self.fields[label].value)
        self.fields["Mobile"].valid = len(self.fields["Mobile"].value or "") == 10
        if all(field.valid for field in self.fields.values()) and all(r.valid for r in self.radios.values()):
            name = f'{self.fields["First Name"].value} {self.fields["Last Name"].value}'
            self.browser.add(S.SHOWN_MODAL, FakeElement())
            self.browser.add(S.RESULT_TITLE, FakeElement(text=RESULT_TITLE))
            self.browser.add(S.RESULT_BODY, FakeElement(text=f"Student Name {name}"))
            self.browser.add(S.CLOSE_RESULT, FakeElement(on_click=self.close))

    def close(self):
        for selector in (S.SHOWN_MODAL, S.RESULT_TITLE, S.RESULT_BODY, S.CLOSE_RESULT):
            self.browser.remove(selector)


def make_page(**kwargs):
    fake = FakePracticeForm(**kwargs)
    return fake, PracticeFormPage(fake.browser, "https://demoqa.test", timeout=0.5, ready_timeout=0.5)


######################################################################
#  L A B E L S   A N D   V A L U E S
######################################################################
class TestHelpers(TestCase):
    """Label lookup and value parsing"""

    def test_normalize_label(self):
        """It should lower-case and collapse whitespace"""
        self.assertEqual(normalize_label("  First   Name "), "first name")

    def test_field_selector(self):
        """It should find fields by label, compact label or placeholder"""
        self.assertEqual(field_selector("first name"), "#firstName")
        self.assertEqual(field_selector("CurrentAddress"), "#currentAddress")
        self.assertIn('placeholder="Subjects"', field_selector("Subjects"))

    def test_parse_list(self):
        """It should read JSON lists and bracketed CSV"""
        self.assertEqual(parse_list('["Sports", "Music"]'), ["Sports", "Music"])
        self.assertEqual(parse_list("[Sports, Music]"), ["Sports", "Music"])
        self.assertEqual(parse_list("Reading"), ["Reading"])
        self.assertEqual(parse_list("[]"), [])

    def test_multiline_address(self):
        """It should build a three-line address of the expected length"""
        address = multiline_address()
        self.assertEqual(len(address), ADDRESS_LENGTH)
        self.assertEqual(address.count("\n"), 2)


######################################################################
#  F I E L D S   A N D   V A L I D A T I O N
######################################################################
class TestFields(TestCase):
    """Typing, required fields and HTML5 validity"""

    def test_fill(self):
        """It should replace the field value"""
        fake, page = make_page()
        fake.fields["First Name"].value = "old"
        page.fill("First Name", "Jane")
        self.assertEqual(page.field_value("First Name"), "Jane")
        page.fill("First Name", "")
        self.assertEqual(page.field_value("First Name"), "")

    def test_fill_disabled(self):
        """It should refuse to type into a disabled field"""
        fake, page = make_page()
        fake.fields["Email"].enabled = False
        with self.assertRaises(AssertionError):
            page.fill("Email", "a@b.com")

    def test_empty_submit(self):
        """It should report every required field invalid after an empty submit"""
        _, page = make_page()
        self.assertFalse(page.was_validated())
        page.submit()
        self.assertTrue(page.was_validated())
        self.assertEqual(page.invalid_fields(), ["First Name", "Last Name", "Mobile", "Gender"])
        self.assertFalse(page.result_shown())

    def test_fill_minimal_except(self):
        """It should leave out the skipped field"""
        fake, page = make_page()
        page.fill_minimal(skip="mobile")
        self.assertEqual(fake.fields["Mobile"].value, "")
        self.assertTrue(fake.radios["Male"].selected)
        page.submit()
        self.assertEqual(page.invalid_fields(), ["Mobile"])

    def test_unknown_gender(self):
        """It should reject a gender with no radio"""
        _, page = make_page()
        with self.assertRaises(AssertionError):
            page.choose_gender("Unknown")

    def test_mobile_maxlength(self):
        """It should read the Mobile maxlength attribute"""
        _, page = make_page()
        self.assertEqual(page.mobile_maxlength(), "10")


######################################################################
#  H O B B I E S   A N D   P I C T U R E
######################################################################
class TestHobbiesAndPicture(TestCase):
    """Checkboxes and the file input"""

    def test_hobbies(self):
        """It should tick the named hobbies"""
        _, page = make_page()
        page.choose_hobbies(["Sports", "Music"])
        self.assertEqual(page.selected_hobbies(), ["Sports", "Music"])

    def test_unknown_hobby(self):
        """It should reject a hobby with no checkbox"""
        _, page = make_page()
        with self.assertRaises(AssertionError):
            page.choose_hobbies(["Chess"])

    def test_picture(self):
        """It should send an absolute path to the file input"""
        fake, page = make_page()
        self.assertEqual(page.picture_accept(), "image/*")
        page.upload_picture("student.jpg")
        self.assertEqual(fake.picture.value, os.path.abspath("student.jpg"))


######################################################################
#  S T A T E   A N D   C I T Y
######################################################################
class TestDropdowns(TestCase):
    """react-select State and City"""

    def test_city_disabled(self):
        """It should report City disabled until a State is chosen"""
        _, page = make_page()
        self.assertFalse(page.dropdown_enabled("City"))
        self.assertFalse(page.menu_opens("City"))
        with self.assertRaises(AssertionError):
            page.select("City", "Delhi")

    def test_select_state_enables_city(self):
        """It should enable City and offer that State's cities"""
        fake, page = make_page()
        page.select("State", "ncr")
        self.assertEqual(fake.state.chosen, "NCR")
        self.assertTrue(page.dropdown_enabled("City"))
        self.assertEqual(page.dropdown_options("City"), ["Delhi", "Gurgaon", "Noida"])
        self.assertFalse(page.menu_open())
        page.select("City", "Noida")
        self.assertEqual(fake.city.chosen, "Noida")

    def test_arrow_down_fallback(self):
        """It should open the menu from the keyboard when the arrow does nothing"""
        fake, page = make_page(city_indicator_opens=False)
        page.select("State", "Haryana")
        page.open_dropdown("City")
        self.assertTrue(page.menu_open())
        page.close_dropdown("City")
        self.assertFalse(page.menu_open())
        self.assertEqual(fake.city.options, ["Karnal", "Panipat"])

    def test_missing_option(self):
        """It should fail when the option is not offered"""
        _, page = make_page()
        with self.assertRaises(AssertionError):
            page.select("State", "Goa")

    def test_unknown_dropdown(self):
        """It should reject a dropdown it does not know"""
        _, page = make_page()
        with self.assertRaises(AssertionError):
            page.dropdown_enabled("Country")


######################################################################
#  R E S U L T   M O D A L
######################################################################
class TestResult(TestCase):
    """Submitting and closing the result modal"""

    def test_submit_and_close(self):
        """It should show the student name and close the modal"""
        _, page = make_page()
        page.fill_minimal()
        page.submit()
        self.assertTrue(page.result_shown())
        result = page.wait_result()
        self.assertEqual(result["title"], RESULT_TITLE)
        self.assertIn("John Doe", result["body"])
        page.close_result()
        self.assertFalse(page.result_shown())

    def test_invalid_email_blocks_submit(self):
        """It should keep the modal closed for an invalid email"""
        fake, page = make_page()
        page.fill_minimal()
        fake.fields["Email"].valid = False
        page.submit()
        self.assertFalse(page.result_shown())
        self.assertFalse(page.field_is_valid("Email"))
