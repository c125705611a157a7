# operator_admin/services/exceptions.py

# --- Not Found Exceptions ---
class HypervisorNotFoundError(Exception):
    """하이퍼바이저를 찾을 수 없을 때"""
    pass

class IPRangeNotFoundError(Exception):
    """IP 대역을 찾을 수 없을 때"""
    pass

class NetworkNotFoundError(Exception):
    """네트워크를 찾을 수 없을 때"""
    pass

class ProjectNotFoundError(Exception):
    """프로젝트를 찾을 수 없을 때"""
    pass

class UserNotFoundError(Exception):
    """사용자를 찾을 수 없을 때"""
    pass

class PermissionNotFoundError(Exception):
    """권한을 찾을 수 없을 때"""
    pass

# --- Creation Exceptions ---
class NetworkCreationError(Exception):
    """네트워크 생성 실패 시 (이름 중복 등)"""
    pass

class ProjectCreationError(Exception):
    """프로젝트 생성 실패 시 (이름 중복 등)"""
    pass

class UserCreationError(Exception):
    """사용자 생성 실패 시 (사용자 이름 중복 등)"""
    pass

# --- Update Exceptions ---
class NetworkUpdateError(Exception):
    """네트워크 수정 실패 시 (다른 네트워크와 이름 중복 등)"""
    pass

class ProjectUpdateError(Exception):
    """프로젝트 수정 실패 시 (다른 프로젝트와 이름 중복 등)"""
    pass

class UserUpdateError(Exception):
    """사용자 수정 실패 시 (다른 사용자와 이름 또는 이메일 중복 등)"""
    pass
