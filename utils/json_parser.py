import json
import re
from typing import Any, List, Optional

from utils.exceptions import MalformedResponseError

class JSONParser:
    """Parser for extracting JSON from LLM responses."""
    
    def __init__(self):
        pass
    
    def extract_array(self, text: Any) -> List[Any]:
        """
        Extract and decode the first top-level JSON array in an LLM response.
        
        Args:
            text: Raw LLM response text
            
        Returns:
            Decoded list
            
        Raises:
            MalformedResponseError: no array span, invalid JSON, or not a list
        """
        if not isinstance(text, str):
            raise MalformedResponseError(f"Expected text response, got {type(text).__name__}")
        
        json_str = self._extract_balanced(text, "[", "]")
        if not json_str:
            raise MalformedResponseError(f"No JSON array found in response:\n{text[:500]}")
        
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(f"Invalid JSON: {e}\nExtracted text: {json_str[:500]}")
        
        if not isinstance(data, list):
            raise MalformedResponseError("Invalid suggestions format.")
        
        return data
    
    def extract_error_message(self, text: Any) -> Optional[str]:
        """Return the message of an {"error": ...} object in the response, if any."""
        if not isinstance(text, str):
            return None
        
        json_str = self._extract_with_patterns(text) or self._extract_balanced(text, "{", "}")
        if not json_str:
            return None
        
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError:
            return None
        
        if isinstance(data, dict) and "error" in data:
            return str(data["error"])
        return None
    
    def _extract_with_patterns(self, text: str) -> str:
        """Extract a JSON object from a fenced code block."""
        patterns = [
            r'```json\s*(.*?)\s*```',  # ```json {...} ```
            r'```\s*(.*?)\s*```',      # ``` {...} ```
        ]
        
        for pattern in patterns:
            match = re.search(pattern, text, re.DOTALL | re.IGNORECASE)
            if match:
                candidate = match.group(1).strip()
                if candidate.startswith('{') and candidate.endswith('}'):
                    return candidate
        
        return ""
    
    def _extract_balanced(self, text: str, opener: str, closer: str) -> str:
        """Return the first balanced opener/closer span, ignoring delimiters inside strings."""
        start = text.find(opener)
        if start == -1:
            return ""
        
        depth = 0
        in_string = False
        escape_next = False
        
        for i in range(start, len(text)):
            char = text[i]
            
            if escape_next:
                escape_next = False
                continue
            
            if char == '\\' and in_string:
                escape_next = True
                continue
            
            if char == '"':
                in_string = not in_string
                continue
            
            if not in_string:
                if char == opener:
                    depth += 1
                elif char == closer:
                    depth -= 1
                    if depth == 0:
                        return text[start:i+1]
        
        return ""
