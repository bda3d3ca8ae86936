USERS_COLLECTION_NAME = 'users'
QUESTIONS_COLLECTION_NAME = 'AllQuestion'
