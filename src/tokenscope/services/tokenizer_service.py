# tokenscope/services/tokenizer_service.py

from typing import List, Optional, Union
from tokenscope.constants.model_constants import MODEL_CATALOG_DATA
from tokenscope.engine.tokenizer import TokenizerManager, tokenizer_manager
from tokenscope.engine.tokenization import TokenizationEngine, format_export
from tokenscope.schemas.tokenizer_schemas import (
    DisplayMode, ExportFormat, ExportRead, ModelDescriptor, ModelRead, ResultSet, TokenizeMode
)
from tokenscope.services.exceptions import NotFoundError

# 目录在进程生命周期内不可变
MODEL_CATALOG: List[ModelDescriptor] = [ModelDescriptor(**item) for item in MODEL_CATALOG_DATA]

class TokenizerService:
    """
    无状态的一次性分词用例，供 REST 接口使用。
    实时会话见 TokenizerSession。
    """
    def __init__(self, manager: Optional[TokenizerManager] = None):
        self.manager = manager or tokenizer_manager
        self.engine = TokenizationEngine(self.manager)

    def list_models(self) -> List[ModelRead]:
        return [
            ModelRead(label=m.label, value=m.value, supported=self.manager.is_supported(m.value))
            for m in MODEL_CATALOG
        ]

    def get_model(self, value: str) -> ModelDescriptor:
        for m in MODEL_CATALOG:
            if m.value == value:
                return m
        raise NotFoundError(f"Model '{value}' is not in the catalog.")

    def encode(self, text: str, model: str) -> ResultSet:
        self.get_model(model)
        return self.engine.compute(text, model, TokenizeMode.ENCODE)

    def decode(self, ids: Union[str, List[int]], model: str) -> ResultSet:
        self.get_model(model)
        if not isinstance(ids, str):
            ids = " ".join(str(i) for i in ids)
        return self.engine.compute(ids, model, TokenizeMode.DECODE)

    def export(
        self,
        text: str,
        model: str,
        mode: TokenizeMode = TokenizeMode.ENCODE,
        display_mode: DisplayMode = DisplayMode.BADGES,
        export_format: ExportFormat = ExportFormat.IDS,
    ) -> ExportRead:
        self.get_model(model)
        result = self.engine.compute(text, model, mode)
        return ExportRead(content=format_export(result, display_mode, export_format), result=result)
