from aclvault.dal.data_access_layer import DataAccessLayer
from aclvault.dal.interface import AccessControlDataAccess

__all__ = ["AccessControlDataAccess", "DataAccessLayer"]
