"""Per-owner scoring configuration catalog."""

from dataclasses import replace
from typing import Dict, List, Mapping, Optional
import logging

from ..errors import InvalidConfiguration
from .scoring_config import ScoringConfiguration

logger = logging.getLogger(__name__)


class ScoringConfigCatalog:
    """In-memory set of scoring configurations grouped by owner.

    Enforces that each owner has zero or one default configuration and
    that the current default is never removed without a successor. The
    analytics engines never read from here; callers resolve a concrete
    configuration first and pass it in.
    """

    def __init__(self, configs: Optional[List[ScoringConfiguration]] = None,
                 fallback: Optional[ScoringConfiguration] = None):
        self._configs: Dict[str, Dict[str, ScoringConfiguration]] = {}
        self.fallback = fallback or ScoringConfiguration.system_default()

        for config in configs or []:
            self.add(config)

    def add(self, config: ScoringConfiguration) -> ScoringConfiguration:
        """Register a configuration. An owner's first config becomes default."""
        config.validate()
        owned = self._configs.setdefault(config.owner_id, {})

        if config.id in owned:
            raise InvalidConfiguration(f"Configuration {config.id} already exists for {config.owner_id}")

        if not owned:
            config = replace(config, is_default=True)
        elif config.is_default:
            if self.default_for(config.owner_id) is not None:
                raise InvalidConfiguration(
                    f"Owner {config.owner_id} already has a default configuration"
                )

        owned[config.id] = config
        logger.debug(f"Added scoring configuration {config.id} for {config.owner_id}")
        return config

    def get(self, owner_id: str, config_id: str) -> ScoringConfiguration:
        try:
            return self._configs[owner_id][config_id]
        except KeyError:
            raise InvalidConfiguration(f"Scoring configuration {config_id} not found for {owner_id}")

    def configs_for(self, owner_id: str) -> List[ScoringConfiguration]:
        """Owner's configurations, default first, then by id."""
        owned = self._configs.get(owner_id, {})
        return sorted(owned.values(), key=lambda c: (not c.is_default, c.id))

    def default_for(self, owner_id: str) -> Optional[ScoringConfiguration]:
        for config in self._configs.get(owner_id, {}).values():
            if config.is_default:
                return config
        return None

    def set_default(self, owner_id: str, config_id: str) -> ScoringConfiguration:
        """Move the default flag to ``config_id``."""
        target = self.get(owner_id, config_id)
        owned = self._configs[owner_id]

        for cid, config in list(owned.items()):
            if config.is_default and cid != config_id:
                owned[cid] = replace(config, is_default=False)

        owned[config_id] = replace(target, is_default=True)
        logger.info(f"Set scoring configuration {config_id} as default for {owner_id}")
        return owned[config_id]

    def update(self, owner_id: str, config_id: str, multipliers: Mapping,
               name: Optional[str] = None) -> ScoringConfiguration:
        """Replace multipliers; bumps the configuration version."""
        current = self.get(owner_id, config_id)
        changes = {"name": name} if name is not None else {}
        updated = current.with_multipliers(multipliers, **changes)
        updated.validate()
        self._configs[owner_id][config_id] = updated
        return updated

    def remove(self, owner_id: str, config_id: str,
               new_default_id: Optional[str] = None) -> None:
        """Delete a configuration.

        Removing the current default requires ``new_default_id`` unless it
        is the owner's last configuration.
        """
        target = self.get(owner_id, config_id)
        owned = self._configs[owner_id]

        if target.is_default and len(owned) > 1:
            if new_default_id is None:
                raise InvalidConfiguration(
                    f"Cannot delete default configuration {config_id} without designating a new default"
                )
            if new_default_id == config_id:
                raise InvalidConfiguration("New default must differ from the deleted configuration")
            self.set_default(owner_id, new_default_id)

        del owned[config_id]
        if not owned:
            del self._configs[owner_id]
        logger.info(f"Deleted scoring configuration {config_id} for {owner_id}")

    def resolve(self, owner_id: str, config_id: Optional[str] = None) -> ScoringConfiguration:
        """Pick a concrete configuration: explicit id, owner default, then fallback."""
        if config_id is not None:
            return self.get(owner_id, config_id)

        default = self.default_for(owner_id)
        if default is not None:
            return default

        logger.debug(f"No default configuration for {owner_id}, using fallback {self.fallback.id}")
        return self.fallback

    def __len__(self) -> int:
        return sum(len(owned) for owned in self._configs.values())
