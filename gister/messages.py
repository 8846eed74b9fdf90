from __future__ import annotations

from typing import Optional, Any, List, Dict
from pydantic import BaseModel, ConfigDict, Field

# Request body sent to the gists endpoint
class GistFile(BaseModel):
	content: str

class GistPayload(BaseModel):
	description: str = ""
	public: bool = False
	files: Dict[str, GistFile] = Field(default_factory=dict)

	def to_json(self) -> str:
		# The service treats an absent description as "leave unchanged/none"
		exclude = None if self.description else {'description'}
		return self.model_dump_json(exclude=exclude)

# Response bodies; unknown keys from the API are ignored
class GistUser(BaseModel):
	model_config = ConfigDict(extra='ignore')

	login: str = ""
	id: int = 0
	node_id: str = ""
	avatar_url: str = ""
	gravatar_id: str = ""
	url: str = ""
	html_url: str = ""
	followers_url: str = ""
	following_url: str = ""
	gists_url: str = ""
	starred_url: str = ""
	subscriptions_url: str = ""
	organizations_url: str = ""
	repos_url: str = ""
	events_url: str = ""
	received_events_url: str = ""
	type: str = ""
	site_admin: bool = False

class GistResponse(BaseModel):
	model_config = ConfigDict(extra='ignore')

	url: str = ""
	forks_url: str = ""
	commits_url: str = ""
	id: str = ""
	node_id: str = ""
	git_pull_url: str = ""
	git_push_url: str = ""
	html_url: str = ""
	files: Dict[str, Any] = Field(default_factory=dict)
	public: bool = False
	created_at: str = ""
	updated_at: str = ""
	description: Optional[str] = None
	comments: int = 0
	user: Optional[GistUser] = None
	comments_url: str = ""
	owner: Optional[Dict[str, Any]] = None
	truncated: bool = False
	forks: List[Any] = Field(default_factory=list)
	history: List[Any] = Field(default_factory=list)

class ErrorReply(BaseModel):
	model_config = ConfigDict(extra='ignore')

	message: str = ""
	# Each entry maps a field or filename to a reason
	errors: List[Dict[str, Any]]

	def reasons(self) -> Dict[str, str]:
		out: Dict[str, str] = {}
		for entry in self.errors:
			for name, reason in entry.items():
				out[name] = f"{reason}"
		return out
