from .sqlalchemy_hypervisor_repository import SqlalchemyHypervisorRepository
from .sqlalchemy_iprange_repository import SqlalchemyIPRangeRepository
from .sqlalchemy_network_repository import SqlalchemyNetworkRepository
from .sqlalchemy_project_repository import SqlalchemyProjectRepository
from .sqlalchemy_user_repository import SqlalchemyUserRepository
from .sqlalchemy_permission_repository import SqlalchemyPermissionRepository
