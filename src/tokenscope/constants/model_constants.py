# tokenscope/constants/model_constants.py

# 只有这些前缀的模型拥有真实的 tokenizer，其余模型走空白切分的降级策略
SUPPORTED_MODEL_FAMILIES = ("gpt",)

MODEL_CATALOG_DATA = [
    {'label': 'GPT-3.5 Turbo', 'value': 'gpt-3.5-turbo'},
    {'label': 'GPT-4', 'value': 'gpt-4'},
    {'label': 'Claude 3 (Anthropic)', 'value': 'claude-3'},
    {'label': 'LLaMA 2', 'value': 'llama-2'},
    {'label': 'Mistral 7B', 'value': 'mistral-7b'},
]
