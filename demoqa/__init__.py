"""
Package: demoqa
Helpers driving the DemoQA demo site and the restful-api.dev objects API
from behave step definitions.
"""
