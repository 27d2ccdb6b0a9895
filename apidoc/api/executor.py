"""
Apidoc Executor - Analyzes many operations in parallel

Each operation is analyzed independently on a thread pool; the only shared
state is the documentation cache. Results keep the input order and a
failing operation is reported without stopping the others.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Union

from config import AnalysisConfig
from apidoc.api.endpoint_scanner import Endpoint
from apidoc.builder.operation_analyzer import OperationAnalysisError, OperationAnalyzer
from apidoc.introspection.documentation import DocumentationLookup
from apidoc.schema.models import AnalysisReport, OperationFailure, OperationSchema

logger = logging.getLogger(__name__)


class ApidocExecutor:
    """Runs OperationAnalyzer over a list of endpoints"""

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        workers: int = 4,
        documentation: Optional[DocumentationLookup] = None,
    ):
        """
        Initialize executor

        Args:
            config: Analysis configuration shared by all operations
            workers: Thread pool size
            documentation: Shared documentation cache
        """
        self.config = config or AnalysisConfig()
        self.workers = max(1, workers)
        self.documentation = documentation or DocumentationLookup()

    def analyze(self, endpoint: Endpoint) -> Union[OperationSchema, OperationFailure]:
        """Analyze one endpoint; analysis errors become failures scoped to it"""
        analyzer = OperationAnalyzer(endpoint.owner, endpoint.function, self.documentation, self.config)
        try:
            return analyzer.analyze()
        except OperationAnalysisError as e:
            logger.warning(f"Skipping operation {e.key}: {e.message}")
            return OperationFailure(key=e.key, error=e.message)

    def execute(self, endpoints: Sequence[Endpoint]) -> AnalysisReport:
        """
        Analyze all endpoints

        Args:
            endpoints: Endpoints to analyze

        Returns:
            AnalysisReport with operations and failures in input order
        """
        report = AnalysisReport()
        if not endpoints:
            return report

        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            results: List[Union[OperationSchema, OperationFailure]] = list(pool.map(self.analyze, endpoints))

        for result in results:
            if isinstance(result, OperationFailure):
                report.failures.append(result)
            else:
                report.operations.append(result)

        logger.info(f"Analyzed {len(report.operations)} operations, {len(report.failures)} failed")
        return report
