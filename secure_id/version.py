"""SecID Meta information.
   SecID issues short, opaque and tamper-evident identifiers
   bound to a shared secret.
"""
__title__ = 'secure_id'
__description__ = (
   'SecID issues short, opaque and tamper-evident identifiers '
   'bound to a shared secret.'
)
__version__ = '0.1.0'
__copyright__ = 'Copyright (c) 2023 Jesus Lara'
__author__ = 'Jesus Lara'
__author_email__ = 'jesuslarag@gmail.com'
__license__ = 'Apache-2.0'
