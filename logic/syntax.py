"""Argument prefixes recognized on the command line."""

PREFIX_NAME = "n/"
PREFIX_PHONE = "p/"
PREFIX_ADDRESS = "a/"
PREFIX_TAG = "t/"
PREFIX_REMARK = "rm/"
PREFIX_ROLE = "r/"
PREFIX_DAY = "d/"
PREFIX_TIME = "ti/"
PREFIX_NEW_DAY = "nd/"
PREFIX_NEW_TIME = "nti/"
PREFIX_PARENT = "par/"

PERSON_PREFIXES = (
    PREFIX_NAME, PREFIX_PHONE, PREFIX_ADDRESS, PREFIX_ROLE, PREFIX_TAG, PREFIX_PARENT,
)
SESSION_PREFIXES = (PREFIX_DAY, PREFIX_TIME)
EDIT_SESSION_PREFIXES = (PREFIX_DAY, PREFIX_TIME, PREFIX_NEW_DAY, PREFIX_NEW_TIME)
EDIT_PERSON_PREFIXES = (PREFIX_NAME, PREFIX_PHONE, PREFIX_ADDRESS, PREFIX_TAG, PREFIX_PARENT)
