#!/usr/bin/env python3
"""Airline customer-service triage: agents hand the conversation to each other through tools."""

import argparse
import asyncio

from swarmlet import Agent, Swarm, configure_logging
from swarmlet.utils.types import ChatMessage, ContextVariables

STARTER_PROMPT = (
    "You are an intelligent and empathetic customer support representative for Flight Airlines. "
    "Before starting each policy, read through all of the user's messages and the entire policy steps. "
    "Follow the policy steps in order. Only call case_resolved once the customer's problem is resolved."
)

FLIGHT_CANCELLATION_POLICY = """
1. Confirm which flight the customer is asking to cancel.
2. Confirm whether the customer wants a refund or flight credits.
3. Call initiate_refund or initiate_flight_credits accordingly.
4. Ask if there is anything else, then call case_resolved.
"""

FLIGHT_CHANGE_POLICY = """
1. Verify the flight details and the reason for the change.
2. Call valid_to_change_flight. If eligible, suggest a new flight one day earlier.
3. Call change_flight once the customer agrees, then call case_resolved.
"""

LOST_BAGGAGE_POLICY = """
1. Call initiate_baggage_search.
2. If the baggage is found, arrange delivery to the customer's address.
3. If not found, call escalate_to_agent. Otherwise call case_resolved.
"""


# Tools

def escalate_to_agent(reason=None):
    """Escalate the case to a human agent."""
    return f"Escalating to agent: {reason}" if reason else "Escalating to agent"


def valid_to_change_flight():
    return "Customer is eligible to change flight"


def change_flight():
    return "Flight was successfully changed!"


def initiate_refund():
    return "Refund initiated"


def initiate_flight_credits():
    return "Successfully initiated flight credits"


def case_resolved():
    return "Case resolved. No further questions."


def initiate_baggage_search():
    return "Baggage was found!"


# Handoffs

def transfer_to_flight_modification():
    return flight_modification


def transfer_to_flight_cancel():
    return flight_cancel


def transfer_to_flight_change():
    return flight_change


def transfer_to_lost_baggage():
    return lost_baggage


def transfer_to_triage():
    """Call this function when a user needs to be transferred to a different agent and a different policy.
    For instance, if a user is asking about a topic that is not handled by the current agent, call this function.
    """
    return triage_agent


def triage_instructions(context_variables: ContextVariables) -> str:
    customer_context = context_variables.get("customer_context", None)
    flight_context = context_variables.get("flight_context", None)
    return f"""You are to triage a users request, and call a tool to transfer to the right intent.
    Once you are ready to transfer to the right intent, call the tool to transfer to the right intent.
    You dont need to know specifics, just the topic of the request.
    When you need more information to triage the request to an agent, ask a direct question without explaining why you're asking it.
    Do not share your thought process with the user! Do not make unreasonable assumptions on behalf of user.
    The customer context is here: {customer_context}, and flight context is here: {flight_context}"""


triage_agent = Agent(
    name="Triage Agent",
    instructions=triage_instructions,
    functions=[transfer_to_flight_modification, transfer_to_lost_baggage],
)

flight_modification = Agent(
    name="Flight Modification Agent",
    instructions="""You are a Flight Modification Agent for a customer service airlines company.
You already know the intent is for flight modification related question. First, look at message history and see if you can determine if the user wants to cancel or change their flight.
Ask user clarifying questions until you know whether or not it is a cancel request or change flight request. Once you know, call the appropriate transfer function. Either ask clarifying questions, or call one of your functions, every time.""",
    functions=[transfer_to_flight_cancel, transfer_to_flight_change],
)

flight_cancel = Agent(
    name="Flight cancel traversal",
    instructions=STARTER_PROMPT + FLIGHT_CANCELLATION_POLICY,
    functions=[
        escalate_to_agent,
        initiate_refund,
        initiate_flight_credits,
        transfer_to_triage,
        case_resolved,
    ],
)

flight_change = Agent(
    name="Flight change traversal",
    instructions=STARTER_PROMPT + FLIGHT_CHANGE_POLICY,
    functions=[
        escalate_to_agent,
        change_flight,
        valid_to_change_flight,
        transfer_to_triage,
        case_resolved,
    ],
)

lost_baggage = Agent(
    name="Lost baggage traversal",
    instructions=STARTER_PROMPT + LOST_BAGGAGE_POLICY,
    functions=[
        escalate_to_agent,
        initiate_baggage_search,
        transfer_to_triage,
        case_resolved,
    ],
)

CONTEXT_VARIABLES: ContextVariables = {
    "customer_context": """Here is what you know about the customer's details:
1. CUSTOMER_ID: customer_12345
2. NAME: John Doe
3. PHONE_NUMBER: (123) 456-7890
4. EMAIL: johndoe@example.com
5. STATUS: Premium
6. ACCOUNT_STATUS: Active
7. BALANCE: $0.00
8. LOCATION: 1234 Main St, San Francisco, CA 94123, USA
""",
    "flight_context": """The customer has an upcoming flight from LGA (Laguardia) in NYC to LAX in Los Angeles.
The flight # is 1919. The flight departure date is 3pm ET, 5/21/2024.""",
}


async def main() -> None:
    """Run the triage flow for one user message, printing the transcript."""
    parser = argparse.ArgumentParser(description="Airline triage demo")
    parser.add_argument("--message", default="I want to change my flight", help="User message")
    parser.add_argument("--max-turns", type=int, default=10, help="Upper bound on turns (default: 10)")
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: SWARMLET_LOG_LEVEL or INFO)",
    )
    args = parser.parse_args()
    configure_logging(args.log_level)

    swarm = Swarm()
    messages: list[ChatMessage] = [{"role": "user", "content": args.message}]
    response = await swarm.run(
        agent=triage_agent,
        messages=messages,
        context_variables=CONTEXT_VARIABLES,
        max_turns=args.max_turns,
    )

    for msg in response.messages:
        who = msg.get("name") or msg.get("role", "unknown")
        print(f"{who}: {msg.get('content', '')}")
    print(f"\nFinal agent: {response.agent.name}")


if __name__ == "__main__":
    asyncio.run(main())
