import logging
from typing import Dict, List, Optional

from openai import AzureOpenAI, OpenAI

from jobdesc_rag.config.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class ChatCompletionClient:
    """
    Thin wrapper over an OpenAI-compatible chat completion endpoint.

    Uses Azure OpenAI when an Azure endpoint is configured, otherwise the
    public OpenAI API. ``model`` is the deployment name on Azure.
    """

    def __init__(
        self,
        model: str,
        client=None,
        max_tokens: int = 1000,
        temperature: float = 0.7,
    ):
        self.model = model
        self.client = client
        self.max_tokens = max_tokens
        self.temperature = temperature

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "ChatCompletionClient":
        config = config or default_settings

        if config.use_azure_openai:
            client = AzureOpenAI(
                azure_endpoint=config.azure_openai_endpoint,
                api_key=config.openai_api_key,
                api_version=config.azure_openai_api_version,
            )
            logger.info(f"Using Azure OpenAI deployment {config.openai_deployment_name}")
        else:
            client = OpenAI(api_key=config.openai_api_key)
            logger.info(f"Using OpenAI model {config.openai_deployment_name}")

        return cls(
            model=config.openai_deployment_name,
            client=client,
            max_tokens=config.chat_max_tokens,
            temperature=config.chat_temperature,
        )

    def complete(self, messages: List[Dict[str, str]]) -> str:
        """
        Send an ordered list of ``{"role", "content"}`` messages and return
        the text of the first choice. Errors from the SDK propagate.
        """
        response = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        return response.choices[0].message.content or ""
