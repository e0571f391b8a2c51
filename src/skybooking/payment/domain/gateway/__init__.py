from .bank_gateway import BankAuthorization as BankAuthorization
from .bank_gateway import BankGateway as BankGateway
