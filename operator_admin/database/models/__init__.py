from .hypervisor import Hypervisor
from .iprange import IPRange
from .network import Network
from .project import Project
from .user import User
from .permission import Permission
from .association import (
    HYPERVISORS_IPRANGES,
    IPRANGES_NETWORKS,
    PROJECTS_USERS,
    PROJECTS_PERMISSIONS,
    hypervisors_ipranges,
    ipranges_networks,
    projects_users,
    projects_permissions,
)
