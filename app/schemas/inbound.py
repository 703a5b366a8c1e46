from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

"""
INBOUND EMAIL SCHEMA
"""


#Inbound email webhook payload, forwarded to the site owner
class InboundEmail(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    sender: Optional[str] = Field(default=None, alias="from")
    to: Union[str, List[str], None] = None
    subject: Optional[str] = None
    html: Optional[str] = None
    text: Optional[str] = None


class InboundOut(BaseModel):
    status: str = "ok"
