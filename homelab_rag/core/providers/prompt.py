"""
Grounded answer prompt.

Defines the prompt every generation backend sends. The system message pins
the model to the supplied context and asks it to say so when the context does
not cover the question.

Dependencies: langchain_core.prompts, langchain_core.messages
System role: Prompt template for answer generation
"""

from collections.abc import Sequence

from langchain_core.messages import BaseMessage
from langchain_core.prompts import ChatPromptTemplate

CONTEXT_SEPARATOR = "\n\n"

SYSTEM_PROMPT = """You are a helpful assistant that answers questions about homelab documentation.

## Instructions
1. Use ONLY the provided context to answer the question
2. If the context doesn't contain enough information, say so clearly instead of guessing
3. Mention which parts of the context you used
4. Be concise but thorough"""

RAG_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("human", """Context from documentation:
{context}

Question: {question}

Answer based on the context above."""),
])


def join_context(context_chunks: Sequence[str]) -> str:
    """Concatenate every chunk in the given order, separated by a paragraph break."""
    return CONTEXT_SEPARATOR.join(context_chunks)


def build_messages(question: str, context_chunks: Sequence[str]) -> list[BaseMessage]:
    """
    Render the prompt as LangChain chat messages.

    Args:
        question: User's question
        context_chunks: Retrieved chunk texts in ranking order

    Returns:
        list[BaseMessage]: [SystemMessage, HumanMessage]
    """
    prompt_value = RAG_PROMPT.invoke({
        "context": join_context(context_chunks),
        "question": question,
    })
    return prompt_value.to_messages()
