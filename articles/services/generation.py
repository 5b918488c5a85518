import logging
from functools import partial
from langchain_core.output_parsers import StrOutputParser
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_groq import ChatGroq
from langchain_ollama import ChatOllama

logger = logging.getLogger(__name__)


def first_line(error):
    message = str(error).strip()
    return message.splitlines()[0] if message else error.__class__.__name__


class LLMProvider:
    """A provider credential plus the models to try on it, in order."""

    def __init__(self, name, models, factory):
        self.name = name
        self.models = list(models)
        self.factory = factory

    def chat_model(self, model):
        return self.factory(model)

    def __repr__(self):
        return f"LLMProvider({self.name!r}, {self.models!r})"


class GenerationClient:
    """
    Tries every model of every provider in order and returns the first
    non-empty completion, or None once all of them have failed.
    """

    def __init__(self, providers):
        self.providers = list(providers)

    def generate(self, prompt):
        if not self.providers:
            logger.error("No LLM provider is configured")
            return None

        for provider in self.providers:
            for model in provider.models:
                logger.info("Generating with %s (%s)...", model, provider.name)
                try:
                    chain = provider.chat_model(model) | StrOutputParser()
                    text = chain.invoke(prompt)
                except Exception as e:
                    logger.warning("%s failed: %s", model, first_line(e))
                    continue

                if text and text.strip():
                    logger.info("%s succeeded", model)
                    return text
                logger.warning("%s returned no content", model)

        return None


# A failing model hands over to the next one; provider retries default to 0.
def gemini_chat(model, api_key, temperature, max_tokens, max_retries, timeout):
    return ChatGoogleGenerativeAI(model=model, google_api_key=api_key,
                                  temperature=temperature, max_output_tokens=max_tokens,
                                  max_retries=max_retries, timeout=timeout)


def groq_chat(model, api_key, temperature, max_tokens, max_retries, timeout):
    return ChatGroq(model=model, api_key=api_key, temperature=temperature, max_tokens=max_tokens,
                    max_retries=max_retries, request_timeout=timeout)


def ollama_chat(model, base_url, temperature, max_tokens, timeout):
    return ChatOllama(model=model, base_url=base_url, temperature=temperature, num_predict=max_tokens,
                      client_kwargs={'timeout': timeout})


def build_providers(config):
    """Providers without a credential in ``config`` are left out entirely."""
    options = {
        'temperature': config.get('TEMPERATURE', 0.7),
        'max_tokens': config.get('MAX_TOKENS', 2048),
        'timeout': config.get('LLM_TIMEOUT', 120),
    }
    max_retries = config.get('LLM_MAX_RETRIES', 0)
    providers = []

    if config.get('GEMINI_API_KEY'):
        providers.append(LLMProvider(
            'gemini', config['GEMINI_MODELS'],
            partial(gemini_chat, api_key=config['GEMINI_API_KEY'], max_retries=max_retries, **options)))

    if config.get('GROQ_API_KEY'):
        providers.append(LLMProvider(
            'groq', config['GROQ_MODELS'],
            partial(groq_chat, api_key=config['GROQ_API_KEY'], max_retries=max_retries, **options)))

    if config.get('OLLAMA_MODEL'):
        providers.append(LLMProvider(
            'ollama', [config['OLLAMA_MODEL']],
            partial(ollama_chat, base_url=config.get('OLLAMA_BASE_URL'), **options)))

    return providers
