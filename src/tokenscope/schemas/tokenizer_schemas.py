# tokenscope/schemas/tokenizer_schemas.py

import enum
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, computed_field

class TokenizeMode(str, enum.Enum):
    ENCODE = "encode"
    DECODE = "decode"

class DisplayMode(str, enum.Enum):
    BADGES = "badges"
    NUMBERED = "numbered"

class ExportFormat(str, enum.Enum):
    # 每行一个 token id，可直接粘贴回 decode 模式
    IDS = "ids"
    # "text -> id" 形式，Numbered 模式下带序号
    ANNOTATED = "annotated"

# --- 模型目录 ---

class ModelDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Display name")
    value: str = Field(..., description="Opaque model identifier, unique within the catalog")

class ModelRead(ModelDescriptor):
    supported: bool = Field(..., description="Whether a real tokenizer backs this model")

# --- 结果集 ---

class Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    id: int = Field(..., ge=0)

class TokenStats(BaseModel):
    token_count: int = 0
    distinct_count: int = 0
    char_count: int = 0

class ResultSet(BaseModel):
    """
    一次 (settled_input, model, mode) 计算的完整输出。
    不可变，每次重算整体替换。
    """
    model_config = ConfigDict(frozen=True)

    mode: TokenizeMode
    model: str
    tokens: List[Token] = Field(default_factory=list)
    text: str = ""

    @classmethod
    def empty(cls, mode: TokenizeMode, model: str) -> "ResultSet":
        return cls(mode=mode, model=model)

    @computed_field
    @property
    def is_empty(self) -> bool:
        if self.mode == TokenizeMode.ENCODE:
            return not self.tokens
        return self.text == ""

    @computed_field
    @property
    def stats(self) -> TokenStats:
        return TokenStats(
            token_count=len(self.tokens),
            distinct_count=len({t.id for t in self.tokens}),
            char_count=len(self.text) if self.mode == TokenizeMode.DECODE else sum(len(t.text) for t in self.tokens),
        )

class SessionSnapshot(BaseModel):
    """推送给展示层的会话状态快照"""
    raw_input: str
    settled_input: str
    active_model: str
    active_mode: TokenizeMode
    display_mode: DisplayMode
    show_indices: bool
    copied: bool
    can_copy: bool
    result: ResultSet

# --- 请求体 ---

class EncodeRequest(BaseModel):
    text: str
    model: str = Field(..., description="Model identifier from the catalog")

class DecodeRequest(BaseModel):
    ids: Union[str, List[int]] = Field(..., description="Token ids, either as a list or as a whitespace/comma separated string")
    model: str

class ExportRequest(BaseModel):
    text: str = Field(..., description="Raw input; free text in encode mode, ids in decode mode")
    model: str
    mode: TokenizeMode = TokenizeMode.ENCODE
    display_mode: DisplayMode = DisplayMode.BADGES
    export_format: ExportFormat = ExportFormat.IDS

class ExportRead(BaseModel):
    content: Optional[str] = None
    result: ResultSet
