"""Unit tests for MongoUserRepository with a mocked pymongo collection."""

import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import USERS_COLLECTION_NAME
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import DuplicateError, StoreError
from domain.model.user import User

CREATED_AT = datetime(2026, 1, 23, 12, 0, 0, tzinfo=timezone.utc)

USER_DOC = {
    '_id': 'user-1',
    'name': 'Ada',
    'email': 'a@x.com',
    'password': '$2b$12$digest',
    'phonenumber': '+15550001111',
    'profilepic': 'https://cdn/x.png',
    'username': 'ada',
    'usertype': 'student',
    'dateofbirth': '1990-01-01',
    'gender': 'f',
    'createdat': CREATED_AT,
}


class MongoUserRepositoryTestCase(unittest.TestCase):

    def setUp(self):
        self.collection = MagicMock()
        db = MagicMock()
        db.__getitem__.return_value = self.collection
        self.db = db
        self.repo = MongoUserRepository(db)


class TestCreate(MongoUserRepositoryTestCase):

    def make_user(self) -> User:
        return User(
            id='user-1', name='Ada', email='a@x.com', password='$2b$12$digest',
            created_at=CREATED_AT, phone_number='+15550001111', profile_pic='https://cdn/x.png',
            username='ada', user_type='student', date_of_birth='1990-01-01', gender='f',
        )

    def test_uses_users_collection(self):
        self.db.__getitem__.assert_called_with(USERS_COLLECTION_NAME)

    def test_inserts_document_with_stored_keys(self):
        user = self.make_user()

        result = self.repo.create(user)

        self.assertEqual(result, user)
        self.collection.insert_one.assert_called_once_with(USER_DOC)

    def test_duplicate_key_raises_duplicate_error(self):
        self.collection.insert_one.side_effect = DuplicateKeyError('E11000 duplicate key error')
        with self.assertRaises(DuplicateError):
            self.repo.create(self.make_user())

    def test_driver_error_raises_store_error(self):
        self.collection.insert_one.side_effect = PyMongoError('connection reset')
        with self.assertRaises(StoreError):
            self.repo.create(self.make_user())


class TestLookups(MongoUserRepositoryTestCase):

    def test_get_by_email_maps_document(self):
        self.collection.find_one.return_value = dict(USER_DOC)

        user = self.repo.get_by_email('a@x.com')

        self.collection.find_one.assert_called_once_with({'email': 'a@x.com'})
        self.assertEqual(user.id, 'user-1')
        self.assertEqual(user.phone_number, '+15550001111')
        self.assertEqual(user.user_type, 'student')
        self.assertEqual(user.date_of_birth, '1990-01-01')
        self.assertEqual(user.created_at, CREATED_AT)

    def test_naive_created_at_is_read_as_utc(self):
        self.collection.find_one.return_value = dict(USER_DOC, createdat=CREATED_AT.replace(tzinfo=None))

        user = self.repo.get_by_email('a@x.com')

        self.assertEqual(user.created_at.tzinfo, timezone.utc)
        self.assertEqual(user.created_at, CREATED_AT)

    def test_missing_created_at_is_none(self):
        doc = dict(USER_DOC)
        del doc['createdat']
        self.collection.find_one.return_value = doc

        self.assertIsNone(self.repo.get_by_email('a@x.com').created_at)

    def test_each_lookup_queries_its_key(self):
        self.collection.find_one.return_value = None

        self.repo.get_by_phone('+15550001111')
        self.repo.get_by_username('ada')
        self.repo.get_by_id('user-1')

        queries = [c.args[0] for c in self.collection.find_one.call_args_list]
        self.assertEqual(queries, [
            {'phonenumber': '+15550001111'},
            {'username': 'ada'},
            {'_id': 'user-1'},
        ])

    def test_not_found_returns_none(self):
        self.collection.find_one.return_value = None
        self.assertIsNone(self.repo.get_by_email('nobody@x.com'))

    def test_empty_key_returns_none_without_query(self):
        self.assertIsNone(self.repo.get_by_email(''))
        self.assertIsNone(self.repo.get_by_phone(''))
        self.collection.find_one.assert_not_called()

    def test_driver_error_raises_store_error(self):
        self.collection.find_one.side_effect = PyMongoError('timeout')
        with self.assertRaises(StoreError):
            self.repo.get_by_email('a@x.com')


class TestUpdateDelete(MongoUserRepositoryTestCase):

    def test_update_maps_fields_and_skips_immutable(self):
        self.collection.find_one_and_update.return_value = dict(USER_DOC, name='Grace')

        user = self.repo.update('user-1', {'name': 'Grace', 'phone_number': '+1555', 'id': 'x'})

        self.assertEqual(user.name, 'Grace')
        self.collection.find_one_and_update.assert_called_once_with(
            {'_id': 'user-1'},
            {'$set': {'name': 'Grace', 'phonenumber': '+1555'}},
            return_document=ReturnDocument.AFTER,
        )

    def test_update_unknown_field_raises(self):
        with self.assertRaises(ValueError):
            self.repo.update('user-1', {'nickname': 'x'})

    def test_update_missing_returns_none(self):
        self.collection.find_one_and_update.return_value = None
        self.assertIsNone(self.repo.update('missing', {'name': 'x'}))

    def test_delete(self):
        self.collection.delete_one.return_value.deleted_count = 1
        self.assertTrue(self.repo.delete('user-1'))
        self.collection.delete_one.assert_called_once_with({'_id': 'user-1'})


class TestEnsureIndexes(MongoUserRepositoryTestCase):

    def test_creates_user_indexes(self):
        self.assertTrue(self.repo.ensure_indexes())

        names = [c.kwargs['name'] for c in self.collection.create_index.call_args_list]
        self.assertEqual(names, [
            'idx_users_email', 'idx_users_username', 'idx_users_phone', 'idx_users_created_at',
        ])
        email_call = self.collection.create_index.call_args_list[0]
        self.assertTrue(email_call.kwargs['unique'])


if __name__ == '__main__':
    unittest.main()
