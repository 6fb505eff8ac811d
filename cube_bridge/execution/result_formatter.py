"""
Result formatting utilities.

Normalizes Cube.js results into a tabular structure for the host.
"""

from typing import Any, Dict, List

from cube_bridge.core.models import QueryResult


class ResultFormatter:
    """
    Formats query results into a consistent structure.
    """

    ANNOTATION_SECTIONS = ("dimensions", "timeDimensions", "measures")

    @staticmethod
    def format_result(result: QueryResult) -> Dict[str, Any]:
        """
        Format a single query result.

        Args:
            result: Result from the executor

        Returns:
            Formatted result dictionary
        """
        formatted: Dict[str, Any] = {
            "total_hits": result.total_hits,
            "documents": result.documents,
            "success": result.success and result.error is None,
        }

        if result.error is not None:
            formatted["error"] = result.error

        return formatted

    @staticmethod
    def format_results(results: List[QueryResult]) -> List[Dict[str, Any]]:
        return [ResultFormatter.format_result(result) for result in results]

    @classmethod
    def get_columns(cls, result: QueryResult) -> List[str]:
        """
        Column names of a result.

        Annotated members come first (dimensions, time dimensions, measures),
        then any other keys in the order they first appear in the rows.
        """
        annotation = result.metadata.get("annotation") or {}
        present = {key for row in result.documents for key in row}

        columns: List[str] = []
        for section in cls.ANNOTATION_SECTIONS:
            for member in annotation.get(section) or {}:
                if member in present and member not in columns:
                    columns.append(member)

        for row in result.documents:
            for key in row:
                if key not in columns:
                    columns.append(key)
        return columns

    @classmethod
    def tabulate(cls, result: QueryResult) -> Dict[str, Any]:
        """
        Convert row objects to columns and value rows.

        Args:
            result: Successful query result

        Returns:
            {"columns": [...], "rows": [[...], ...]}; missing values are None
        """
        columns = cls.get_columns(result)
        rows = [[row.get(column) for column in columns] for row in result.documents]
        return {"columns": columns, "rows": rows}
