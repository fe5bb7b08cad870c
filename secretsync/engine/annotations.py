"""Annotation keys written on synced Secrets"""

ONEPASSWORD_PREFIX = "operator.1password.io"
NAME_ANNOTATION = ONEPASSWORD_PREFIX + "/item-name"
VERSION_ANNOTATION = ONEPASSWORD_PREFIX + "/item-version"
ITEM_PATH_ANNOTATION = ONEPASSWORD_PREFIX + "/item-path"
RESTART_DEPLOYMENTS_ANNOTATION = ONEPASSWORD_PREFIX + "/auto-restart"
