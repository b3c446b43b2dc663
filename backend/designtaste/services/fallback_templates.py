"""
Deterministic output used when an AI provider call fails.
"""

_FORM_TAILWIND = """\
<form className="max-w-md mx-auto bg-white p-6 rounded-lg shadow-md">
  <div className="mb-4">
    <label className="block text-gray-700 text-sm font-bold mb-2">
      Email
    </label>
    <input
      type="email"
      className="w-full px-3 py-2 border border-gray-300 rounded-md focus:outline-none focus:ring-2 focus:ring-blue-500"
      placeholder="Enter your email"
    />
  </div>
  <button
    type="submit"
    className="w-full bg-blue-500 hover:bg-blue-600 text-white font-bold py-2 px-4 rounded-md transition-colors"
  >
    Submit
  </button>
</form>"""

_FORM_REACT = """\
import React, { useState } from 'react';

interface FormProps {
  onSubmit: (email: string) => void;
}

export default function EmailForm({ onSubmit }: FormProps) {
  const [email, setEmail] = useState('');

  const handleSubmit = (e: React.FormEvent) => {
    e.preventDefault();
    onSubmit(email);
  };

  return (
    <form onSubmit={handleSubmit} className="max-w-md mx-auto bg-white p-6 rounded-lg shadow-md">
      <div className="mb-4">
        <label htmlFor="email" className="block text-gray-700 text-sm font-bold mb-2">
          Email
        </label>
        <input
          id="email"
          type="email"
          value={email}
          onChange={(e) => setEmail(e.target.value)}
          className="w-full px-3 py-2 border border-gray-300 rounded-md focus:outline-none focus:ring-2 focus:ring-blue-500"
          placeholder="Enter your email"
          required
        />
      </div>
      <button
        type="submit"
        className="w-full bg-blue-500 hover:bg-blue-600 text-white font-bold py-2 px-4 rounded-md transition-colors"
      >
        Submit
      </button>
    </form>
  );
}"""

_FORM_CSS = """\
.email-form {
  max-width: 28rem;
  margin: 0 auto;
  background: white;
  padding: 1.5rem;
  border-radius: 0.5rem;
  box-shadow: 0 4px 6px -1px rgba(0, 0, 0, 0.1);
}

.form-label {
  display: block;
  color: #374151;
  font-size: 0.875rem;
  font-weight: 700;
  margin-bottom: 0.5rem;
}

.form-input {
  width: 100%;
  padding: 0.5rem 0.75rem;
  border: 1px solid #D1D5DB;
  border-radius: 0.375rem;
  transition: all 0.2s;
}

.form-input:focus {
  outline: 2px solid #3B82F6;
  border-color: #3B82F6;
}

.submit-button {
  width: 100%;
  background: #3B82F6;
  color: white;
  font-weight: 700;
  padding: 0.5rem 1rem;
  border-radius: 0.375rem;
  border: none;
  cursor: pointer;
  transition: background-color 0.2s;
}

.submit-button:hover {
  background: #2563EB;
}"""

_BUTTON_TAILWIND = """\
<button className="bg-blue-500 hover:bg-blue-600 active:bg-blue-700 text-white font-semibold py-2 px-6 rounded-lg shadow-md hover:shadow-lg transform hover:-translate-y-0.5 transition-all duration-200 focus:outline-none focus:ring-2 focus:ring-blue-500 focus:ring-offset-2">
  Click Me
</button>"""

_BUTTON_REACT = """\
import React from 'react';

interface ButtonProps {
  children: React.ReactNode;
  onClick?: () => void;
  variant?: 'primary' | 'secondary';
  disabled?: boolean;
}

export default function Button({
  children,
  onClick,
  variant = 'primary',
  disabled = false
}: ButtonProps) {
  const baseClasses = 'font-semibold py-2 px-6 rounded-lg shadow-md transition-all duration-200 focus:outline-none focus:ring-2 focus:ring-offset-2';

  const variantClasses = variant === 'primary'
    ? 'bg-blue-500 hover:bg-blue-600 active:bg-blue-700 text-white focus:ring-blue-500 hover:shadow-lg transform hover:-translate-y-0.5'
    : 'bg-gray-200 hover:bg-gray-300 text-gray-800 focus:ring-gray-500';

  const disabledClasses = disabled ? 'opacity-50 cursor-not-allowed transform-none' : '';

  return (
    <button
      onClick={onClick}
      disabled={disabled}
      className={`${baseClasses} ${variantClasses} ${disabledClasses}`}
    >
      {children}
    </button>
  );
}"""

_BUTTON_CSS = """\
.btn {
  font-weight: 600;
  padding: 0.5rem 1.5rem;
  border-radius: 0.5rem;
  box-shadow: 0 4px 6px -1px rgba(0, 0, 0, 0.1);
  transition: all 0.2s;
  border: none;
  cursor: pointer;
}

.btn-primary {
  background: #3B82F6;
  color: white;
}

.btn-primary:hover {
  background: #2563EB;
  box-shadow: 0 10px 15px -3px rgba(0, 0, 0, 0.1);
  transform: translateY(-2px);
}

.btn-primary:active {
  background: #1D4ED8;
}

.btn-primary:focus {
  outline: 2px solid #3B82F6;
  outline-offset: 2px;
}"""

FALLBACK_COMPONENT_CODE = {
    "form": {
        "tailwindCode": _FORM_TAILWIND,
        "reactCode": _FORM_REACT,
        "cssCode": _FORM_CSS,
        "description": "A clean, modern email form with focus states and hover effects",
        "features": ["Responsive design", "Focus states", "Hover effects", "Clean typography"],
        "accessibility": ["Proper labels", "Focus indicators", "ARIA attributes", "Keyboard navigation"],
        "responsive": True,
        "animations": ["Hover transitions", "Focus ring"],
    },
    "button": {
        "tailwindCode": _BUTTON_TAILWIND,
        "reactCode": _BUTTON_REACT,
        "cssCode": _BUTTON_CSS,
        "description": "A modern button with hover effects and smooth transitions",
        "features": ["Hover animation", "Active states", "Shadow effects", "Focus indicators"],
        "accessibility": ["Focus ring", "ARIA support", "Keyboard navigation", "Disabled state"],
        "responsive": True,
        "animations": ["Hover lift", "Shadow transition", "Color transitions"],
    },
}


def fallback_component_code(component_type: str) -> dict:
    template = FALLBACK_COMPONENT_CODE.get(component_type, FALLBACK_COMPONENT_CODE["button"])
    return {k: list(v) if isinstance(v, list) else v for k, v in template.items()}


def fallback_prompt(component_type: str) -> str:
    prompts = {
        "form": (
            f"Create a modern {component_type} with clean input fields, proper spacing, focus states, "
            "and a prominent submit button. Use a card-like container with subtle shadows and ensure "
            "good contrast for accessibility."
        ),
        "button": (
            f"Design a {component_type} with smooth hover animations, proper focus states, and multiple "
            "variants. Include elevation effects and ensure it meets accessibility standards."
        ),
        "navigation": (
            f"Build a {component_type} menu with clear hierarchy, hover effects, and responsive behavior. "
            "Use proper spacing and typography scale."
        ),
        "card": (
            f"Create a {component_type} component with proper content hierarchy, subtle shadows, and hover "
            "interactions. Ensure responsive layout and good information architecture."
        ),
    }
    return prompts.get(
        component_type,
        f"Create a modern {component_type} component with clean design, proper spacing, and smooth interactions.",
    )


VARIATION_IMAGES = (
    "https://images.unsplash.com/photo-1581291518857-4e27b48ff24e?ixlib=rb-4.0.3&auto=format&fit=crop&w=800&q=80",
    "https://images.unsplash.com/photo-1559028006-448665bd7c7f?ixlib=rb-4.0.3&auto=format&fit=crop&w=800&q=80",
)


def fallback_variations(component_type: str | None) -> list[dict]:
    name = component_type or "Component"
    return [
        {
            "title": f"Modern {name} Design",
            "description": "A clean, modern approach with improved spacing and typography",
            "changes": ["Increased padding", "Modern typography", "Subtle shadows"],
            "designRationale": "Modern design principles focus on clean lines and generous whitespace",
            "imageUrl": VARIATION_IMAGES[0],
        },
        {
            "title": f"Bold {name} Variant",
            "description": "A more vibrant design with stronger visual hierarchy",
            "changes": ["Bolder colors", "Stronger contrast", "Enhanced CTAs"],
            "designRationale": "Bold designs create stronger user engagement and clearer actions",
            "imageUrl": VARIATION_IMAGES[1],
        },
    ]


# tag -> (suggested prompt, component type)
_ELEMENT_SUGGESTIONS = {
    "button": ("Improve this button by adding modern styling and hover effects", "button"),
    "nav": ("Improve this navigation by enhancing accessibility and spacing", "navigation"),
    "header": ("Improve this header section by adding better visual hierarchy", "header"),
    "footer": ("Improve this footer by organizing content and improving readability", "footer"),
    "form": ("Improve this form by enhancing user experience and validation", "form"),
    "section": ("Improve this section by updating the design and layout", "section"),
    "article": ("Improve this content area by enhancing typography and spacing", "content area"),
    "div": ("Improve this component by modernizing the design and layout", "component"),
}


def fallback_element_suggestion(tag_name: str | None) -> tuple[str, str]:
    tag = (tag_name or "div").lower()
    return _ELEMENT_SUGGESTIONS.get(tag, _ELEMENT_SUGGESTIONS["div"])


def mock_element_code(element_data: dict, framework: str) -> dict:
    """Stand-in for a failed per-element generation; echoes the element's own tag and text."""
    tag = (element_data.get("tagName") or "div").lower()
    name = "Button" if tag == "button" else "Component"
    text = element_data.get("textContent") or "Component Content"
    code = f"""\
export function Improved{name}() {{
  return (
    <{tag} className="
      bg-gradient-to-r from-blue-500 to-blue-600
      text-white font-semibold
      px-6 py-3 rounded-lg
      hover:from-blue-600 hover:to-blue-700
      focus:outline-none focus:ring-2 focus:ring-blue-500 focus:ring-offset-2
      transition-all duration-200
      shadow-lg hover:shadow-xl
    ">
      {text}
    </{tag}>
  )
}}"""
    return {
        "description": f"Improved {name.lower()} with better styling and accessibility",
        "improvements": [
            "Enhanced visual hierarchy with proper typography",
            "Improved color contrast for accessibility",
            "Added responsive design patterns",
            "Included subtle animations for better UX",
        ],
        "code": code,
    }
