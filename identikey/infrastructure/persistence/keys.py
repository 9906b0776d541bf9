"""Key naming scheme for identity data in Redis.

Default layout:
- uid:{uid}          -> Hash (name, password_hash)
- user:{name}        -> String (uid)
- uid:{uid}:auth     -> String (current token)
- auth:{token}       -> String (uid)
- global:uid         -> Integer counter
- users              -> List of names, newest first
"""

from dataclasses import dataclass
from typing import Optional

from identikey.config.settings import KeySettings


@dataclass(frozen=True)
class KeySchema:
    """Builds engine keys from the configured templates"""

    uid_counter: str = "global:uid"
    user_roster: str = "users"
    user_record_template: str = "uid:{uid}"
    name_index_template: str = "user:{name}"
    forward_token_template: str = "uid:{uid}:auth"
    reverse_token_template: str = "auth:{token}"

    @classmethod
    def from_settings(cls, settings: Optional[KeySettings] = None) -> "KeySchema":
        settings = settings or KeySettings()
        return cls(
            uid_counter=settings.uid_counter_key,
            user_roster=settings.user_roster_key,
            user_record_template=settings.user_record_template,
            name_index_template=settings.name_index_template,
            forward_token_template=settings.forward_token_template,
            reverse_token_template=settings.reverse_token_template,
        )

    def user_record(self, uid: str) -> str:
        return self.user_record_template.format(uid=uid)

    def name_index(self, name: str) -> str:
        return self.name_index_template.format(name=name)

    def forward_token(self, uid: str) -> str:
        return self.forward_token_template.format(uid=uid)

    def reverse_token(self, token: str) -> str:
        return self.reverse_token_template.format(token=token)
