from .dynamodb_store import DynamoDBStore as DynamoDBStore
from .dynamodb_store import error_code as error_code
from .dynamodb_store import raise_if_unavailable as raise_if_unavailable
