from .hypervisor import IHypervisorRepository
from .iprange import IIPRangeRepository
from .network import INetworkRepository
from .project import IProjectRepository
from .user import IUserRepository
from .permission import IPermissionRepository
