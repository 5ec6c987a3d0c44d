"""
Models for the change detection domain.
"""
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Optional, Any


@dataclass
class BuildDefinitionRecord:
    """Stored and current fingerprint of the build file"""
    path: str
    current_fingerprint: str
    stored_fingerprint: Optional[str] = None

    @property
    def changed(self) -> bool:
        return self.stored_fingerprint is None or self.stored_fingerprint != self.current_fingerprint

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        result = asdict(self)
        result['changed'] = self.changed
        return result


@dataclass
class BaseImageRecord:
    """Stored and current digest of one base image"""
    image_reference: str
    current_digest: str
    digest_file: str
    stored_digest: Optional[str] = None

    @property
    def changed(self) -> bool:
        # An empty digest means the pull failed; always rebuild on that
        if not self.current_digest:
            return True
        return self.stored_digest is None or self.stored_digest != self.current_digest

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        result = asdict(self)
        result['changed'] = self.changed
        return result


@dataclass
class RebuildDecision:
    """Outcome of change detection for one run"""
    required: bool = False
    forced: bool = False
    build_definition: Optional[BuildDefinitionRecord] = None
    base_images: List[BaseImageRecord] = field(default_factory=list)

    @property
    def should_build(self) -> bool:
        return self.required or self.forced

    def get_changed_images(self) -> List[str]:
        """References of base images whose digest changed"""
        return [record.image_reference for record in self.base_images if record.changed]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'required': self.required,
            'forced': self.forced,
            'should_build': self.should_build,
            'build_definition': self.build_definition.to_dict() if self.build_definition else None,
            'base_images': [record.to_dict() for record in self.base_images],
        }


@dataclass
class RebuildResult:
    """Result of a full run: the decision and what was done about it"""
    decision: RebuildDecision
    built: bool = False
    build_exit_code: Optional[int] = None
    image_tags: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.built or self.build_exit_code == 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'decision': self.decision.to_dict(),
            'built': self.built,
            'build_exit_code': self.build_exit_code,
            'image_tags': list(self.image_tags),
        }
