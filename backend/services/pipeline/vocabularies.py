"""Fixed feature vocabularies for the hashing two-tower encoder.

Values outside a vocabulary encode to all zeros for that block.
"""

SKILLS: list[str] = [
    "Swift", "Python", "JavaScript", "TypeScript", "React", "Vue", "Angular",
    "iOS Development", "Android Development", "Web Development",
    "AI", "Machine Learning", "Deep Learning", "Data Science", "NLP",
    "Product Management", "Project Management", "Scrum", "Agile",
    "UX Design", "UI Design", "Interaction Design", "Visual Design",
    "DevOps", "Cloud Computing", "AWS", "Azure", "GCP",
    "Backend Development", "Frontend Development", "Full Stack",
    "Database Design", "SQL", "NoSQL",
    "Cybersecurity", "Blockchain", "Web3",
    "Marketing", "Growth Hacking", "SEO", "SEM",
    "Business Strategy", "Consulting", "Finance",
]

HOBBIES: list[str] = [
    "Coffee Culture", "Photography", "Hiking", "Traveling", "Backpacking",
    "Reading", "Writing", "Blogging", "Podcasting",
    "Gaming", "Board Games", "Video Games",
    "Music", "Playing Instruments", "Concerts",
    "Cooking", "Baking", "Craft Beer", "Wine Tasting",
    "Fitness", "Yoga", "Meditation", "Running", "Cycling",
    "Art", "Painting", "Drawing", "Design",
    "Volunteering", "Social Impact", "Sustainability",
]

VALUES: list[str] = [
    "Innovation", "Collaboration", "Curiosity", "Passion", "Growth",
    "Integrity", "Diversity", "Inclusion", "Equality",
    "Sustainability", "Environmental Impact", "Social Responsibility",
    "Excellence", "Quality", "Attention to Detail",
    "Work-Life Balance", "Wellbeing", "Mental Health",
    "Transparency", "Open Communication", "Trust",
]

INDUSTRIES: list[str] = [
    "Technology", "Software", "SaaS",
    "Finance", "FinTech", "Banking", "Investments",
    "Healthcare", "Medical Devices", "Biotech", "Pharma",
    "Education", "EdTech", "Training",
    "E-commerce", "Retail", "Consumer Goods",
    "Gaming", "Entertainment", "Media", "Content Creation",
    "Consulting", "Management Consulting", "Strategy Consulting",
    "Startup", "Entrepreneurship", "Venture Capital",
    "Enterprise", "B2B", "B2C",
    "Government", "Non-profit", "Social Impact",
    "Manufacturing", "Logistics", "Supply Chain",
]

INTENTIONS: list[str] = ["learnGrow", "connectShare", "buildCollaborate", "unwindChat"]

SUB_INTENTIONS: list[str] = [
    "careerDirection", "skillDevelopment", "industryTransition",
    "industryInsights", "peerSupport", "coffeeChat",
    "cofounderMatch", "projectCollaboration", "friendship",
]

EXPERIENCE_LEVELS: list[str] = ["Intern", "Entry", "Mid", "Senior", "Executive"]

CAREER_STAGES: list[str] = ["earlyCareer", "midLevel", "manager", "director", "executive"]

FUNCTIONS: list[str] = [
    "Engineering", "Product", "Design", "Data", "Research",
    "Marketing", "Sales", "Operations", "Finance", "Consulting",
    "People", "Legal", "Founder",
]

MAX_YEARS_OF_EXPERIENCE = 50.0
