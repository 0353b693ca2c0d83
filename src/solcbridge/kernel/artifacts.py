"""Artifact extraction from decoded compiler output.

Walks file -> contract and produces one ContractArtifact per contract that
has bytecode. Contracts without bytecode (interfaces, abstract contracts)
are skipped without a diagnostic.
"""

import logging
from typing import Dict

from solcbridge.contracts import ContractArtifact
from solcbridge.kernel.link_refs import resolve_link_references
from solcbridge.kernel.schema import RawCompilerOutput, parse_contract_metadata

logger = logging.getLogger(__name__)


def extract_artifacts(output: RawCompilerOutput, path: str) -> Dict[str, ContractArtifact]:
    """Build the contract-name -> artifact map for one invocation.

    Args:
        output: Decoded compiler output
        path: Source path(s) of the invocation, used in error messages

    Returns:
        Mapping of contract name to artifact. A contract name appearing in
        two source files keeps the one seen last.

    Raises:
        MalformedOutput: a contract with bytecode has unusable metadata
    """
    artifacts: Dict[str, ContractArtifact] = {}
    for source_file, contracts in output.contracts.items():
        for contract_name, contract in contracts.items():
            bytecode = contract.bytecode
            if bytecode is None or not bytecode.code:
                logger.debug("Skipping %s:%s (no bytecode)", source_file, contract_name)
                continue

            metadata = parse_contract_metadata(contract.metadata, path, contract_name)
            if contract_name in artifacts:
                logger.debug(
                    "Contract %s in %s replaces the one from %s",
                    contract_name, source_file, artifacts[contract_name].source_file,
                )
            artifacts[contract_name] = ContractArtifact(
                contract_name=contract_name,
                source_file=source_file,
                bytecode=resolve_link_references(bytecode.code, bytecode.link_references),
                abi=metadata.output.abi,
                devdoc=metadata.output.devdoc,
                userdoc=metadata.output.userdoc,
                compiler=metadata.compiler.version if metadata.compiler else None,
            )
    return artifacts
