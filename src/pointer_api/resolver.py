"""
Resolution engine: turns an address into a single pointer/base-asset classification.

Lookups for one address follow the family's fixed priority order. In "parallel" mode every
candidate lookup is issued at once and the first positive answer in priority order wins; in
"sequential" mode lookups are issued one by one and stop at the first positive answer.
"""
import asyncio
import logging
from typing import List, Literal, Optional, Tuple

from pointer_api.classification import AddressClassifier, LookupCheck, ResolutionPlan, is_null_evm_address
from pointer_api.client_protocol import PointerQueryProtocol
from pointer_api.config import ServiceConfig
from pointer_api.models import ClassificationResult, LookupResult, PointerType
from pointer_api.validation import is_native_denom


Strategy = Literal["parallel", "sequential"]


class PointerResolver:
    def __init__(
        self,
        client: PointerQueryProtocol,
        classifier: Optional[AddressClassifier] = None,
        strategy: Strategy = "parallel",
        native_denom: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if strategy not in ("parallel", "sequential"):
            raise ValueError(f"Unknown resolution strategy: {strategy}")
        self.client = client
        self.classifier = classifier or AddressClassifier()
        self.strategy = strategy
        self.native_denom = native_denom or ServiceConfig.NATIVE_DENOM
        self.logger = logger or logging.getLogger(__name__)

    async def classify(self, address: str) -> ClassificationResult:
        """
        Classify one address. Never raises: lookup failures degrade to "absent" and any
        other fault becomes an error-tagged result.
        """
        if not isinstance(address, str):
            return ClassificationResult.failure(repr(address), f"Unsupported address format: {address!r}")
        try:
            return await self._classify(address)
        except Exception:
            self.logger.exception(f"Unexpected error determining properties for {address}")
            return ClassificationResult.failure(address, f"Failed to determine properties for {address}")

    async def _classify(self, address: str) -> ClassificationResult:
        if is_null_evm_address(address):
            # The chain's gas denom sits behind the null address; the registry does not expose it.
            return ClassificationResult.pointer(address, PointerType.NATIVE.name, self.native_denom)

        plan = self.classifier.plan_for(address)
        if plan is None:
            self.logger.debug(f"Unsupported address format: {address}")
            return ClassificationResult.failure(address, f"Unsupported address format: {address}")

        match, outcomes = await self._run_checks(address, plan)

        if match is None:
            if outcomes and all(o.is_unavailable for o in outcomes):
                self.logger.warning(f"All {len(outcomes)} lookups failed for {address}")
                return ClassificationResult.failure(
                    address, f"Chain query service unavailable for {address}"
                )
            result = ClassificationResult.base_asset(address, plan.fallback_type)
        else:
            result = self._interpret(address, *match)

        self.logger.debug(
            f"Classified {address} ({plan.family.value}): pointer={result.is_pointer} "
            f"type={result.pointer_type} lookups={len(outcomes)}"
        )
        return result

    async def _run_checks(
        self, address: str, plan: ResolutionPlan
    ) -> Tuple[Optional[Tuple[LookupCheck, LookupResult]], List[LookupResult]]:
        """Return the winning (check, result) pair, if any, and every lookup result obtained."""
        checks = plan.checks
        if self.strategy == "parallel":
            outcomes = list(await asyncio.gather(*(self._lookup(address, c) for c in checks)))
            for check, outcome in zip(checks, outcomes):
                if outcome.is_found:
                    return (check, outcome), outcomes
            return None, outcomes

        outcomes = []
        for check in checks:
            outcome = await self._lookup(address, check)
            outcomes.append(outcome)
            if outcome.is_found:
                return (check, outcome), outcomes
        return None, outcomes

    async def _lookup(self, address: str, check: LookupCheck) -> LookupResult:
        if check.by_pointer:
            return await self.client.pointee_by_pointer(address, check.pointer_type)
        return await self.client.pointer_by_pointee(address, check.pointer_type)

    def _interpret(self, address: str, check: LookupCheck, outcome: LookupResult) -> ClassificationResult:
        info = outcome.info
        if check.by_pointer:
            pointer_type = check.pointer_type.name
            if is_native_denom(info.pointee):
                pointer_type = PointerType.NATIVE.name
            return ClassificationResult.pointer(address, pointer_type, info.pointee)
        return ClassificationResult.base_asset(address, check.pointer_type.name, info.pointer)
