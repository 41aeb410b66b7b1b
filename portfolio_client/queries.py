"""GraphQL documents used by the portfolio site."""

_GREETING_FIELDS = """
      linkId
      companyName
      recruiterName
      context
      greeting
      message
      skills
"""

_PROJECT_FIELDS = """
        id
        title
        description
        status
        highlights
        tech
        githubUrl
        liveUrl
        imageUrl
        startDate
        endDate
        featured
        order
"""

_DEVELOPER_FIELDS = """
      id
      name
      title
      bio
      email
      website
      github
      linkedin
      location
      yearsOfExperience
      skillSets {
        id
        name
        skills
      }
      isActive
"""

GET_ADVOCATE_GREETING = f"""
  query GetAdvocateGreeting {{
    getAdvocateGreeting {{{_GREETING_FIELDS}    }}
  }}
"""

GET_DEVELOPER = f"""
  query GetDeveloper($id: ID!) {{
    getDeveloper(id: $id) {{{_DEVELOPER_FIELDS}    }}
  }}
"""

LIST_DEVELOPERS = f"""
  query ListDevelopers {{
    listDevelopers {{{_DEVELOPER_FIELDS}    }}
  }}
"""

GET_PROJECT = f"""
  query GetProject($id: ID!) {{
    getProject(id: $id) {{{_PROJECT_FIELDS}        developerId
    }}
  }}
"""

GET_DEVELOPER_WITH_PROJECTS = f"""
  query GetDeveloperWithProjects($id: ID!) {{
    getDeveloper(id: $id) {{{_DEVELOPER_FIELDS}      projects {{{_PROJECT_FIELDS}      }}
    }}
  }}
"""

GET_DEVELOPER_WITH_ADVOCATE_GREETING = f"""
  query GetDeveloperWithAdvocateGreeting($id: ID!) {{
    getDeveloper(id: $id) {{{_DEVELOPER_FIELDS}      projects {{{_PROJECT_FIELDS}      }}
    }}
    getAdvocateGreeting {{{_GREETING_FIELDS}    }}
  }}
"""

GET_JOB_MATCHING = f"""
  query GetJobMatching {{
    getJobMatching {{{_GREETING_FIELDS}    }}
  }}
"""

ASK_AI_QUESTION = """
  query AskAIQuestion($question: String!) {
    askAIQuestion(question: $question) {
      answer
      context
    }
  }
"""

RESET_CONVERSATION = """
  mutation ResetConversation {
    resetConversation
  }
"""
