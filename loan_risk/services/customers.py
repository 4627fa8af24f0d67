"""Customer registration and lookup"""

import logging

from loan_risk.domain.exceptions import CustomerNotFoundError
from loan_risk.domain.models import Customer
from loan_risk.infrastructure.database.repositories import CustomerRepository


class CustomerService:
    def __init__(self, customers: CustomerRepository):
        self.customers = customers

    def create_customer(self, customer: Customer) -> Customer:
        """Raises DuplicateCustomerError if the email is already registered"""
        logging.info("Creating customer", extra={"email": customer.email})
        created = self.customers.create_customer(customer)
        logging.info("Customer created", extra={"customer_id": created.id})
        return created

    def get_customer(self, customer_id: int) -> Customer:
        customer = self.customers.get_customer_by_id(customer_id)
        if customer is None:
            logging.warning("Customer not found", extra={"customer_id": customer_id})
            raise CustomerNotFoundError(customer_id)
        return customer
